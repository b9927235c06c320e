"""Interactive text console for the e-ticket database.

Main menu drives the DDL/seed operations, the Events sub-menu covers CRUD
plus title search, and the Reports sub-menu shows ticket sales and seat
availability. Streams are injectable so the loop can be driven from tests.
"""

import sys

from .ticket_db import ETicketDb, OperationError

RULE = '-' * 38

MAIN_MENU = [
    '===== E-Ticket System =====',
    '1. Drop Tables',
    '2. Create Tables',
    '3. Populate Tables (insert dummy data)',
    '4. Query Tables (Events sub-menu)',
    '5. Reports',
    '0. Exit',
]

EVENTS_MENU = [
    '=== Query Menu (Events) ===',
    '1. List Events',
    '2. Add Event',
    '3. Update Event Title',
    '4. Delete Event',
    '5. Search Events by Title',
    '0. Back to Main Menu',
]

REPORTS_MENU = [
    '=== Reports ===',
    '1. Ticket Sales per Event',
    '2. Seat Availability per Showtime',
    '0. Back to Main Menu',
]


class ConsoleMenu:
    def __init__(self, ticket_db: ETicketDb, stdin=None, stdout=None, separator=' | '):
        self.ticket_db = ticket_db
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.separator = separator

    def print(self, text=''):
        self.stdout.write(f'{text}\n')

    def prompt(self, text) -> str:
        self.stdout.write(text)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            raise EOFError()
        return line.strip()

    def read_int(self, text) -> int:
        return int(self.prompt(text))

    def print_rows(self, header, rows, empty_message):
        self.print(self.separator.join(header))
        self.print(RULE)
        if not rows:
            self.print(empty_message)
            return
        for row in rows:
            self.print(self.separator.join(
                'null' if value is None else str(value) for value in row
            ))

    def _choose(self, menu_lines, actions) -> bool:
        """Show a menu, run the chosen action; False once the user picks 0"""
        for line in menu_lines:
            self.print(line)
        choice = self.prompt('Choose option: ')
        if choice == '0':
            return False
        action = actions.get(choice)
        if action is None:
            self.print('Invalid choice. Try again.')
        else:
            action()
        self.print()
        return True

    def run(self):
        actions = {
            '1': self.drop_tables,
            '2': self.create_tables,
            '3': self.populate_tables,
            '4': self.events_menu,
            '5': self.reports_menu,
        }
        try:
            while self._choose(MAIN_MENU, actions):
                pass
        except (EOFError, KeyboardInterrupt):
            self.print()
        self.print('Exiting. Bye!')

    def events_menu(self):
        actions = {
            '1': self.list_events,
            '2': self.add_event,
            '3': self.update_event_title,
            '4': self.delete_event,
            '5': self.search_events,
        }
        while self._choose(EVENTS_MENU, actions):
            pass

    def reports_menu(self):
        actions = {
            '1': self.sales_report,
            '2': self.seat_availability,
        }
        while self._choose(REPORTS_MENU, actions):
            pass

    # Actions print their own outcome and return False when the
    # database reported an error.

    def drop_tables(self) -> bool:
        self.print('=== Dropping tables (if they exist) ===')
        for result in self.ticket_db.drop_tables():
            if result.ok:
                self.print(f'OK: {result.statement}')
            else:
                self.print(f'Skip: {result.statement} ({result.message})')
        self.print('Done dropping tables.')
        return True

    def create_tables(self) -> bool:
        self.print('=== Creating tables ===')
        results = self.ticket_db.create_tables()
        failed = [r for r in results if not r.ok]
        if failed:
            self.print(f'Error creating tables: {failed[0].message}')
            return False
        self.print('All tables created successfully.')
        return True

    def populate_tables(self) -> bool:
        self.print('=== Inserting dummy data into tables ===')
        try:
            self.ticket_db.populate_tables()
        except OperationError as e:
            self.print(f'Error populating tables: {e.message}')
            return False
        self.print('Dummy data inserted successfully.')
        return True

    def table_status(self) -> bool:
        try:
            status = self.ticket_db.table_status()
        except OperationError as e:
            self.print(f'Error reading tables: {e.message}')
            return False
        self.print_rows(
            ['Table', 'Exists'],
            [(name, 'yes' if exists else 'no') for name, exists in status.items()],
            '(No tables)',
        )
        return True

    def list_events(self) -> bool:
        try:
            events = self.ticket_db.list_events()
        except OperationError as e:
            self.print(f'Error listing events: {e.message}')
            return False
        self.print_rows(
            ['EventID', 'Title', 'Category'],
            [(e.event_id, e.title, e.category) for e in events],
            '(No rows found in Events table)',
        )
        return True

    def add_event(self):
        self.print('=== Add New Event ===')
        try:
            event_id = self.read_int('New EventID (integer, must be unique): ')
            organizer_id = self.read_int('OrganizerID (must exist in ORGANIZERS): ')
        except ValueError:
            self.print('Invalid number input. Event not added.')
            return
        title = self.prompt('Title: ')
        category = self.prompt('Category (e.g., Concert, Movie): ')
        description = self.prompt('Description (can be empty): ')
        self.do_add_event(event_id, organizer_id, title, category, description)

    def do_add_event(self, event_id, organizer_id, title, category, description='') -> bool:
        try:
            rows = self.ticket_db.add_event(event_id, organizer_id, title, category, description)
        except OperationError as e:
            self.print(f'Error inserting event: {e.message}')
            return False
        self.print(f'Inserted {rows} row(s) into EVENTS.')
        return True

    def update_event_title(self):
        self.print('=== Update Event Title ===')
        try:
            event_id = self.read_int('EventID to update: ')
        except ValueError:
            self.print('Invalid number input. Nothing updated.')
            return
        new_title = self.prompt('New Title: ')
        self.do_update_event_title(event_id, new_title)

    def do_update_event_title(self, event_id, new_title) -> bool:
        try:
            rows = self.ticket_db.update_event_title(event_id, new_title)
        except OperationError as e:
            self.print(f'Error updating event: {e.message}')
            return False
        if rows == 0:
            self.print(f'No event found with EventID = {event_id}')
        else:
            self.print(f'Updated {rows} row(s).')
        return True

    def delete_event(self):
        self.print('=== Delete Event ===')
        try:
            event_id = self.read_int('EventID to delete: ')
        except ValueError:
            self.print('Invalid number input. Nothing deleted.')
            return
        self.do_delete_event(event_id)

    def do_delete_event(self, event_id) -> bool:
        try:
            rows = self.ticket_db.delete_event(event_id)
        except OperationError as e:
            self.print(f'Error deleting event (maybe FK constraints): {e.message}')
            return False
        if rows == 0:
            self.print(f'No event found with EventID = {event_id}')
        else:
            self.print(f'Deleted {rows} row(s).')
        return True

    def search_events(self):
        self.print('=== Search Events by Title ===')
        self.do_search_events(self.prompt('Enter keyword: '))

    def do_search_events(self, keyword) -> bool:
        try:
            events = self.ticket_db.search_events_by_title(keyword)
        except OperationError as e:
            self.print(f'Error searching events: {e.message}')
            return False
        self.print_rows(
            ['EventID', 'Title', 'Category'],
            [(e.event_id, e.title, e.category) for e in events],
            '(No events match that keyword)',
        )
        return True

    def sales_report(self) -> bool:
        self.print('=== Ticket Sales per Event ===')
        try:
            sales = self.ticket_db.event_sales_report()
        except OperationError as e:
            self.print(f'Error building sales report: {e.message}')
            return False
        self.print_rows(
            ['EventID', 'Title', 'TicketsSold', 'Revenue'],
            [(s.event_id, s.title, s.tickets_sold, s.revenue) for s in sales],
            '(No rows found in Events table)',
        )
        return True

    def seat_availability(self):
        text = self.prompt('ShowtimeID (empty for all): ')
        if not text:
            self.do_seat_availability()
            return
        try:
            showtime_id = int(text)
        except ValueError:
            self.print('Invalid number input.')
            return
        self.do_seat_availability(showtime_id)

    def do_seat_availability(self, showtime_id=None) -> bool:
        self.print('=== Seat Availability per Showtime ===')
        try:
            rows = self.ticket_db.seat_availability(showtime_id)
        except OperationError as e:
            self.print(f'Error building seat availability: {e.message}')
            return False
        self.print_rows(
            ['ShowtimeID', 'Title', 'Start', 'Available', 'Held', 'Sold'],
            [(r.showtime_id, r.title, r.start, r.available, r.held, r.sold) for r in rows],
            '(No showtimes found)',
        )
        return True
