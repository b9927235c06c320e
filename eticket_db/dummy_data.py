"""Fixed demonstration rows for every table, keyed by table name.

Rows are listed parent-first so inserting them in order never violates a
foreign key. Orders rely on the OrderDateTime column default; payment
PaidAt is filled in at population time.
"""

import datetime
from dataclasses import dataclass
from decimal import Decimal

from . import schema


PAID_AT = object()


@dataclass
class TableRows:
    table: str
    columns: tuple
    rows: list

    def insert_statement(self):
        placeholders = ', '.join(['%s'] * len(self.columns))
        return (
            f'INSERT INTO {self.table} ({", ".join(self.columns)}) '
            f'VALUES ({placeholders})'
        )

    def resolved_rows(self, now):
        return [tuple(now if v is PAID_AT else v for v in row) for row in self.rows]


DUMMY_ROWS = [
    TableRows(
        table='Users',
        columns=('UserID', 'FirstName', 'LastName', 'Email', 'Phone'),
        rows=[
            (1, 'Ahmad', 'Kanaan', 'ahmad@example.com', '4161111111'),
            (2, 'John', 'Doe', 'john@example.com', '4162222222'),
            (3, 'Sarah', 'Ali', 'sarah@example.com', '6473333333'),
        ],
    ),
    TableRows(
        table='Organizers',
        columns=('OrganizerID', 'Name', 'ContactEmail', 'ContactPhone'),
        rows=[
            (1, 'Live Nation', 'contact@livenation.com', '4165550000'),
            (2, 'Cineplex', 'info@cineplex.com', '4165551234'),
        ],
    ),
    TableRows(
        table='Venues',
        columns=('VenueID', 'Name', 'Address', 'City', 'Capacity'),
        rows=[
            (1, 'Scotiabank Arena', '40 Bay St', 'Toronto', 20000),
            (2, 'Cineplex YD Square', '10 Dundas St E', 'Toronto', 500),
        ],
    ),
    TableRows(
        table='Events',
        columns=('EventID', 'OrganizerID', 'Title', 'Category', 'Description'),
        rows=[
            (1, 1, 'Drake Live Concert', 'Concert', 'Drake performing live in Toronto.'),
            (2, 2, 'Avengers: Endgame', 'Movie', 'Special screening of Avengers Endgame.'),
        ],
    ),
    TableRows(
        table='Showtimes',
        columns=('ShowtimeID', 'EventID', 'VenueID', 'StartDateTime', 'BasePrice'),
        rows=[
            (1, 1, 1, datetime.datetime(2025, 12, 10, 20, 0), Decimal('150.00')),
            (2, 2, 2, datetime.datetime(2025, 12, 12, 18, 0), Decimal('20.00')),
        ],
    ),
    TableRows(
        table='Seats',
        columns=('SeatID', 'VenueID', 'Section', 'RowLabel', 'SeatNumber'),
        rows=[
            (1, 1, 'Floor', 'A', '1'),
            (2, 1, 'Floor', 'A', '2'),
            (3, 1, 'Floor', 'A', '3'),
            (4, 2, 'Front', 'B', '5'),
            (5, 2, 'Front', 'B', '6'),
        ],
    ),
    TableRows(
        table='Orders',
        columns=('OrderID', 'UserID', 'OrderTotal', 'Status'),
        rows=[
            (1, 1, Decimal('150.00'), 'PAID'),
            (2, 2, Decimal('20.00'), 'PAID'),
        ],
    ),
    TableRows(
        table='Payments',
        columns=('PaymentID', 'OrderID', 'Amount', 'Method', 'PaidAt', 'AuthCode'),
        rows=[
            (1, 1, Decimal('150.00'), 'CARD', PAID_AT, 'AUTH12345'),
            (2, 2, Decimal('20.00'), 'CARD', PAID_AT, 'AUTH67890'),
        ],
    ),
    TableRows(
        table='SeatMaps',
        columns=('SeatMapID', 'ShowtimeID', 'SeatID', 'Status'),
        rows=[
            (1, 1, 1, 'AVAILABLE'),
            (2, 1, 2, 'AVAILABLE'),
            (3, 1, 3, 'HELD'),
            (4, 2, 4, 'AVAILABLE'),
            (5, 2, 5, 'SOLD'),
        ],
    ),
    TableRows(
        table='Tickets',
        columns=('TicketID', 'OrderID', 'ShowtimeID', 'SeatID', 'TicketPrice', 'QRCode', 'IsValidated'),
        rows=[
            (1, 1, 1, 1, Decimal('150.00'), 'QR-ABC-111', 'N'),
            (2, 2, 2, 5, Decimal('20.00'), 'QR-XYZ-222', 'Y'),
        ],
    ),
]


def insert_statements(now=None):
    """All dummy inserts as [(sql, args), ...] in create order"""
    now = now or datetime.datetime.now().replace(microsecond=0)
    by_table = {t.table: t for t in DUMMY_ROWS}
    statements = []
    for table_name in schema.create_order():
        table_rows = by_table.get(table_name)
        if table_rows is None:
            continue
        sql = table_rows.insert_statement()
        for row in table_rows.resolved_rows(now):
            statements.append((sql, row))
    return statements
