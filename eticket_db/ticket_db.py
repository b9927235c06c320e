from dataclasses import dataclass
from decimal import Decimal
from logging import getLogger

from mysql.connector import Error as MySQLError

from . import dummy_data, schema
from .mysql_api import MySQLApi
from .table_structure import compact_sql

logger = getLogger(__name__)


LIST_EVENTS_QUERY = 'SELECT EventID, Title, Category FROM Events ORDER BY EventID'

SEARCH_EVENTS_QUERY = (
    'SELECT EventID, Title, Category FROM Events '
    'WHERE LOWER(Title) LIKE %s ORDER BY EventID'
)

INSERT_EVENT = (
    'INSERT INTO Events (EventID, OrganizerID, Title, Category, Description) '
    'VALUES (%s, %s, %s, %s, %s)'
)

UPDATE_EVENT_TITLE = 'UPDATE Events SET Title = %s WHERE EventID = %s'

DELETE_EVENT = 'DELETE FROM Events WHERE EventID = %s'

EVENT_SALES_QUERY = '''
SELECT e.EventID, e.Title,
       COUNT(t.TicketID) AS TicketsSold,
       COALESCE(SUM(t.TicketPrice), 0) AS Revenue
FROM Events e
LEFT JOIN Showtimes s ON s.EventID = e.EventID
LEFT JOIN Tickets t ON t.ShowtimeID = s.ShowtimeID
GROUP BY e.EventID, e.Title
ORDER BY e.EventID
'''

SEAT_AVAILABILITY_QUERY = '''
SELECT s.ShowtimeID, e.Title, s.StartDateTime,
       COALESCE(SUM(CASE WHEN m.Status = 'AVAILABLE' THEN 1 ELSE 0 END), 0) AS Available,
       COALESCE(SUM(CASE WHEN m.Status = 'HELD' THEN 1 ELSE 0 END), 0) AS Held,
       COALESCE(SUM(CASE WHEN m.Status = 'SOLD' THEN 1 ELSE 0 END), 0) AS Sold
FROM Showtimes s
JOIN Events e ON e.EventID = s.EventID
LEFT JOIN SeatMaps m ON m.ShowtimeID = s.ShowtimeID
{where}
GROUP BY s.ShowtimeID, e.Title, s.StartDateTime
ORDER BY s.ShowtimeID
'''


class OperationError(Exception):
    """A database call failed; carries the offending statement and the server message"""

    def __init__(self, message, statement=None):
        super().__init__(message)
        self.message = message
        self.statement = statement


@dataclass
class StatementResult:
    statement: str
    ok: bool
    message: str = ''


@dataclass
class EventRow:
    event_id: int
    title: str
    category: str


@dataclass
class EventSales:
    event_id: int
    title: str
    tickets_sold: int
    revenue: Decimal


@dataclass
class SeatAvailability:
    showtime_id: int
    title: str
    start: object
    available: int
    held: int
    sold: int


class ETicketDb:
    def __init__(self, mysql_api: MySQLApi):
        self.mysql_api = mysql_api

    def _execute(self, statement, args=None):
        try:
            return self.mysql_api.execute(statement, args=args, commit=True)
        except MySQLError as e:
            logger.warning(f'{compact_sql(statement)} failed: {e}')
            raise OperationError(str(e), statement=statement) from e

    def _fetch(self, query, args=None):
        try:
            return self.mysql_api.fetch_all(query, args=args)[1]
        except MySQLError as e:
            logger.warning(f'{compact_sql(query)} failed: {e}')
            raise OperationError(str(e), statement=query) from e

    def drop_tables(self) -> list[StatementResult]:
        results = []
        for table_name in schema.drop_order():
            statement = schema.get_table(table_name).drop_statement()
            try:
                self.mysql_api.execute(statement, commit=True)
            except MySQLError as e:
                logger.info(f'Skip: {statement} ({e})')
                results.append(StatementResult(statement, ok=False, message=str(e)))
                continue
            logger.info(f'OK: {statement}')
            results.append(StatementResult(statement, ok=True))
        return results

    def create_tables(self) -> list[StatementResult]:
        results = []
        for table in schema.TABLES:
            statement = table.create_statement()
            try:
                self.mysql_api.execute(statement, commit=True)
            except MySQLError as e:
                logger.error(f'Error creating table {table.name}: {e}')
                results.append(StatementResult(statement, ok=False, message=str(e)))
                break
            logger.info(f'Created table {table.name}')
            results.append(StatementResult(statement, ok=True))
        return results

    def populate_tables(self) -> int:
        statements = dummy_data.insert_statements()
        try:
            inserted = self.mysql_api.run_in_transaction(statements)
        except MySQLError as e:
            logger.error(f'Error populating tables: {e}')
            raise OperationError(str(e)) from e
        logger.info(f'Inserted {inserted} dummy row(s)')
        return inserted

    def list_events(self) -> list[EventRow]:
        return [EventRow(*row) for row in self._fetch(LIST_EVENTS_QUERY)]

    def search_events_by_title(self, keyword) -> list[EventRow]:
        pattern = f'%{keyword.strip().lower()}%'
        rows = self._fetch(SEARCH_EVENTS_QUERY, (pattern,))
        return [EventRow(*row) for row in rows]

    def add_event(self, event_id, organizer_id, title, category, description='') -> int:
        return self._execute(
            INSERT_EVENT, (event_id, organizer_id, title, category, description),
        )

    def update_event_title(self, event_id, new_title) -> int:
        return self._execute(UPDATE_EVENT_TITLE, (new_title, event_id))

    def delete_event(self, event_id) -> int:
        return self._execute(DELETE_EVENT, (event_id,))

    def event_sales_report(self) -> list[EventSales]:
        return [
            EventSales(event_id, title, int(sold), Decimal(revenue))
            for event_id, title, sold, revenue in self._fetch(EVENT_SALES_QUERY)
        ]

    def seat_availability(self, showtime_id=None) -> list[SeatAvailability]:
        if showtime_id is None:
            rows = self._fetch(SEAT_AVAILABILITY_QUERY.format(where=''))
        else:
            rows = self._fetch(
                SEAT_AVAILABILITY_QUERY.format(where='WHERE s.ShowtimeID = %s'),
                (showtime_id,),
            )
        return [
            SeatAvailability(sid, title, start, int(available), int(held), int(sold))
            for sid, title, start, available, held, sold in rows
        ]

    def table_status(self) -> dict[str, bool]:
        try:
            existing = {t.lower() for t in self.mysql_api.get_tables()}
        except MySQLError as e:
            raise OperationError(str(e)) from e
        return {name: name.lower() in existing for name in schema.create_order()}
