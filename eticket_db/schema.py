"""
E-ticket reservation schema (3NF/BCNF).

Ten tables, declared parent-first so that every foreign key points at a
table created earlier:

    Users, Organizers, Venues, Events, Showtimes, Seats,
    Orders, Payments, SeatMaps, Tickets

Constraint enforcement is left to the database engine.
"""

from .table_structure import (
    CheckConstraint,
    ForeignKey,
    TableField,
    TableStructure,
    UniqueKey,
)


def _fk(name, column, ref_table):
    return ForeignKey(name=name, columns=[column], ref_table=ref_table, ref_columns=[column])


USERS = TableStructure(
    name='Users',
    fields=[
        TableField('UserID', 'INT'),
        TableField('FirstName', 'VARCHAR(100)', 'NOT NULL'),
        TableField('LastName', 'VARCHAR(100)', 'NOT NULL'),
        TableField('Email', 'VARCHAR(255)', 'NOT NULL UNIQUE'),
        TableField('Phone', 'VARCHAR(30)'),
        TableField('CreatedAt', 'DATETIME', 'DEFAULT CURRENT_TIMESTAMP NOT NULL'),
    ],
    primary_key='UserID',
)

ORGANIZERS = TableStructure(
    name='Organizers',
    fields=[
        TableField('OrganizerID', 'INT'),
        TableField('Name', 'VARCHAR(200)', 'NOT NULL'),
        TableField('ContactEmail', 'VARCHAR(255)'),
        TableField('ContactPhone', 'VARCHAR(30)'),
    ],
    primary_key='OrganizerID',
)

VENUES = TableStructure(
    name='Venues',
    fields=[
        TableField('VenueID', 'INT'),
        TableField('Name', 'VARCHAR(200)', 'NOT NULL'),
        TableField('Address', 'VARCHAR(300)'),
        TableField('City', 'VARCHAR(120)'),
        TableField('Capacity', 'INT'),
    ],
    primary_key='VenueID',
)

EVENTS = TableStructure(
    name='Events',
    fields=[
        TableField('EventID', 'INT'),
        TableField('OrganizerID', 'INT', 'NOT NULL'),
        TableField('Title', 'VARCHAR(200)', 'NOT NULL'),
        TableField('Category', 'VARCHAR(100)'),
        TableField('Description', 'VARCHAR(1000)'),
    ],
    primary_key='EventID',
    foreign_keys=[_fk('fk_events_organizer', 'OrganizerID', 'Organizers')],
)

SHOWTIMES = TableStructure(
    name='Showtimes',
    fields=[
        TableField('ShowtimeID', 'INT'),
        TableField('EventID', 'INT', 'NOT NULL'),
        TableField('VenueID', 'INT', 'NOT NULL'),
        TableField('StartDateTime', 'DATETIME', 'NOT NULL'),
        TableField('BasePrice', 'DECIMAL(10,2)', 'NOT NULL'),
    ],
    primary_key='ShowtimeID',
    foreign_keys=[
        _fk('fk_showtimes_event', 'EventID', 'Events'),
        _fk('fk_showtimes_venue', 'VenueID', 'Venues'),
    ],
    unique_keys=[
        UniqueKey('uq_showtimes_event_venue_start', ['EventID', 'VenueID', 'StartDateTime']),
    ],
)

SEATS = TableStructure(
    name='Seats',
    fields=[
        TableField('SeatID', 'INT'),
        TableField('VenueID', 'INT', 'NOT NULL'),
        TableField('Section', 'VARCHAR(50)', 'NOT NULL'),
        TableField('RowLabel', 'VARCHAR(20)', 'NOT NULL'),
        TableField('SeatNumber', 'VARCHAR(20)', 'NOT NULL'),
    ],
    primary_key='SeatID',
    foreign_keys=[_fk('fk_seats_venue', 'VenueID', 'Venues')],
    unique_keys=[
        UniqueKey('uq_venue_section_row_seat', ['VenueID', 'Section', 'RowLabel', 'SeatNumber']),
    ],
)

ORDERS = TableStructure(
    name='Orders',
    fields=[
        TableField('OrderID', 'INT'),
        TableField('UserID', 'INT', 'NOT NULL'),
        TableField('OrderDateTime', 'DATETIME', 'DEFAULT CURRENT_TIMESTAMP NOT NULL'),
        TableField('OrderTotal', 'DECIMAL(10,2)', 'NOT NULL'),
        TableField('Status', 'VARCHAR(20)', 'NOT NULL'),
    ],
    primary_key='OrderID',
    foreign_keys=[_fk('fk_orders_user', 'UserID', 'Users')],
)

PAYMENTS = TableStructure(
    name='Payments',
    fields=[
        TableField('PaymentID', 'INT'),
        TableField('OrderID', 'INT', 'NOT NULL'),
        TableField('Amount', 'DECIMAL(10,2)', 'NOT NULL'),
        TableField('Method', 'VARCHAR(40)', 'NOT NULL'),
        TableField('PaidAt', 'DATETIME'),
        TableField('AuthCode', 'VARCHAR(64)'),
    ],
    primary_key='PaymentID',
    foreign_keys=[_fk('fk_payments_order', 'OrderID', 'Orders')],
)

SEAT_STATUSES = ('AVAILABLE', 'HELD', 'SOLD')

SEATMAPS = TableStructure(
    name='SeatMaps',
    fields=[
        TableField('SeatMapID', 'INT'),
        TableField('ShowtimeID', 'INT', 'NOT NULL'),
        TableField('SeatID', 'INT', 'NOT NULL'),
        TableField('Status', 'VARCHAR(16)', 'NOT NULL'),
    ],
    primary_key='SeatMapID',
    foreign_keys=[
        _fk('fk_seatmaps_showtime', 'ShowtimeID', 'Showtimes'),
        _fk('fk_seatmaps_seat', 'SeatID', 'Seats'),
    ],
    unique_keys=[UniqueKey('uq_seatmaps_showtime_seat', ['ShowtimeID', 'SeatID'])],
    checks=[
        CheckConstraint(
            'chk_seatmaps_status',
            'Status IN (' + ', '.join(f"'{s}'" for s in SEAT_STATUSES) + ')',
        ),
    ],
)

TICKETS = TableStructure(
    name='Tickets',
    fields=[
        TableField('TicketID', 'INT'),
        TableField('OrderID', 'INT', 'NOT NULL'),
        TableField('ShowtimeID', 'INT', 'NOT NULL'),
        TableField('SeatID', 'INT', 'NOT NULL'),
        TableField('TicketPrice', 'DECIMAL(10,2)', 'NOT NULL'),
        TableField('QRCode', 'VARCHAR(128)', 'NOT NULL'),
        TableField('IsValidated', 'CHAR(1)', "DEFAULT 'N' NOT NULL"),
        TableField('ValidatedAt', 'DATETIME'),
    ],
    primary_key='TicketID',
    foreign_keys=[
        _fk('fk_tickets_order', 'OrderID', 'Orders'),
        _fk('fk_tickets_showtime', 'ShowtimeID', 'Showtimes'),
        _fk('fk_tickets_seat', 'SeatID', 'Seats'),
    ],
    unique_keys=[
        UniqueKey('uq_tickets_qrcode', ['QRCode']),
        UniqueKey('uq_tickets_showtime_seat', ['ShowtimeID', 'SeatID']),
    ],
    checks=[CheckConstraint('chk_tickets_isvalidated', "IsValidated IN ('Y','N')")],
)


TABLES = [
    USERS,
    ORGANIZERS,
    VENUES,
    EVENTS,
    SHOWTIMES,
    SEATS,
    ORDERS,
    PAYMENTS,
    SEATMAPS,
    TICKETS,
]

TABLES_BY_NAME = {t.name: t for t in TABLES}


def create_order():
    return [t.name for t in TABLES]


def drop_order():
    return [t.name for t in reversed(TABLES)]


def get_table(name) -> TableStructure:
    try:
        return TABLES_BY_NAME[name]
    except KeyError:
        raise KeyError(f'unknown table {name}') from None
