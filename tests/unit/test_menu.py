"""Unit tests for the console menu, driven through in-memory streams"""

import io

import pytest

from eticket_db.menu import ConsoleMenu
from eticket_db.ticket_db import ETicketDb
from tests.utils.fake_mysql_api import FakeMySQLApi, mysql_error


def run_menu(api, *lines):
    stdin = io.StringIO(''.join(f'{line}\n' for line in lines))
    stdout = io.StringIO()
    ConsoleMenu(ETicketDb(api), stdin=stdin, stdout=stdout).run()
    return stdout.getvalue()


@pytest.fixture
def api():
    return FakeMySQLApi()


@pytest.mark.unit
def test_exit(api):
    output = run_menu(api, '0')

    assert '===== E-Ticket System =====' in output
    assert output.rstrip().endswith('Exiting. Bye!')
    assert api.executed == []


@pytest.mark.unit
def test_end_of_input_exits(api):
    output = run_menu(api)
    assert 'Exiting. Bye!' in output


class InterruptedInput:
    def readline(self):
        raise KeyboardInterrupt()


@pytest.mark.unit
def test_ctrl_c_exits(api):
    stdout = io.StringIO()

    ConsoleMenu(ETicketDb(api), stdin=InterruptedInput(), stdout=stdout).run()

    assert stdout.getvalue().rstrip().endswith('Exiting. Bye!')
    assert api.executed == []


@pytest.mark.unit
def test_invalid_choice(api):
    output = run_menu(api, '9', '0')
    assert 'Invalid choice. Try again.' in output


@pytest.mark.unit
def test_drop_then_create(api):
    api.fail_on('DROP TABLE Tickets', mysql_error("Unknown table 'Tickets'", errno=1051))

    output = run_menu(api, '1', '2', '0')

    assert "Skip: DROP TABLE Tickets (1051: Unknown table 'Tickets')" in output
    assert 'OK: DROP TABLE Users' in output
    assert 'Done dropping tables.' in output
    assert 'All tables created successfully.' in output


@pytest.mark.unit
def test_create_error_reported(api):
    api.fail_on('CREATE TABLE Users', mysql_error("Table 'Users' already exists", errno=1050))

    output = run_menu(api, '2', '0')

    assert "Error creating tables: 1050: Table 'Users' already exists" in output
    assert 'All tables created successfully.' not in output


@pytest.mark.unit
def test_populate(api):
    output = run_menu(api, '3', '0')
    assert 'Dummy data inserted successfully.' in output


@pytest.mark.unit
def test_populate_error(api):
    api.fail_on('INSERT INTO Tickets', mysql_error('Duplicate entry', errno=1062))

    output = run_menu(api, '3', '0')

    assert 'Error populating tables: 1062: Duplicate entry' in output
    assert api.committed == []


@pytest.mark.unit
def test_list_events(api):
    api.returns('FROM Events ORDER BY EventID', [(1, 'Drake Live Concert', 'Concert')])

    output = run_menu(api, '4', '1', '0', '0')

    assert 'EventID | Title | Category' in output
    assert '1 | Drake Live Concert | Concert' in output


@pytest.mark.unit
def test_list_events_null_category(api):
    api.returns('FROM Events ORDER BY EventID', [(7, 'Untitled Showcase', None)])

    output = run_menu(api, '4', '1', '0', '0')

    assert '7 | Untitled Showcase | null' in output
    assert 'None' not in output


@pytest.mark.unit
def test_list_events_empty(api):
    output = run_menu(api, '4', '1', '0', '0')
    assert '(No rows found in Events table)' in output


@pytest.mark.unit
def test_add_event(api):
    output = run_menu(api, '4', '2', '3', '1', 'Jazz Night', 'Concert', '', '0', '0')

    assert 'Inserted 1 row(s) into EVENTS.' in output
    command, args = api.executed[-1]
    assert command.startswith('INSERT INTO Events')
    assert args == (3, 1, 'Jazz Night', 'Concert', '')


@pytest.mark.unit
def test_add_event_bad_number(api):
    output = run_menu(api, '4', '2', 'three', '0', '0')

    assert 'Invalid number input. Event not added.' in output
    assert api.executed == []


@pytest.mark.unit
def test_update_missing_event(api):
    api.rowcount('UPDATE Events', 0)

    output = run_menu(api, '4', '3', '42', 'New Title', '0', '0')

    assert 'No event found with EventID = 42' in output


@pytest.mark.unit
def test_update_bad_number(api):
    output = run_menu(api, '4', '3', 'x', '0', '0')

    assert 'Invalid number input. Nothing updated.' in output
    assert api.executed == []


@pytest.mark.unit
def test_update_event(api):
    output = run_menu(api, '4', '3', '1', 'Drake World Tour', '0', '0')

    assert 'Updated 1 row(s).' in output
    assert api.executed[-1][1] == ('Drake World Tour', 1)


@pytest.mark.unit
def test_delete_fk_error(api):
    api.fail_on('DELETE FROM Events', mysql_error('Cannot delete or update a parent row', errno=1451))

    output = run_menu(api, '4', '4', '1', '0', '0')

    assert 'Error deleting event (maybe FK constraints): 1451: Cannot delete or update a parent row' in output


@pytest.mark.unit
def test_delete_bad_number(api):
    output = run_menu(api, '4', '4', '', '0', '0')
    assert 'Invalid number input. Nothing deleted.' in output


@pytest.mark.unit
def test_search_no_match(api):
    output = run_menu(api, '4', '5', 'opera', '0', '0')

    assert '(No events match that keyword)' in output
    assert api.executed[-1][1] == ('%opera%',)


@pytest.mark.unit
def test_reports(api):
    api.returns('TicketsSold', [(1, 'Drake Live Concert', 1, 150)])

    output = run_menu(api, '5', '1', '2', '', '0', '0')

    assert 'EventID | Title | TicketsSold | Revenue' in output
    assert '1 | Drake Live Concert | 1 | 150' in output
    assert '(No showtimes found)' in output


@pytest.mark.unit
def test_custom_separator(api):
    api.returns('FROM Events ORDER BY EventID', [(2, 'Avengers: Endgame', 'Movie')])
    stdin = io.StringIO('4\n1\n0\n0\n')
    stdout = io.StringIO()

    ConsoleMenu(ETicketDb(api), stdin=stdin, stdout=stdout, separator=';').run()

    assert '2;Avengers: Endgame;Movie' in stdout.getvalue()


@pytest.mark.unit
def test_seat_availability_bad_showtime_id(api):
    output = run_menu(api, '5', '2', 'abc', '0', '0')

    assert 'Invalid number input.' in output
    assert '=== Seat Availability per Showtime ===' not in output
    assert api.executed == []
