"""
End-to-end tests against a running MySQL 8 server.

Marked optional: run with `pytest --run-optional` once the server from
tests/configs/tests_config_live.yaml is reachable.
"""

from decimal import Decimal
from pathlib import Path

import pytest

from eticket_db.config import Settings
from eticket_db.connection_pool import get_pool_manager
from eticket_db.mysql_api import MySQLApi
from eticket_db.ticket_db import ETicketDb, OperationError
from tests.utils.mysql_test_api import MySQLTestApi


CONFIG_FILE = Path(__file__).parent.parent / 'configs' / 'tests_config_live.yaml'


@pytest.fixture
def settings():
    config = Settings()
    config.load(str(CONFIG_FILE))
    return config


@pytest.fixture
def ticket_db(settings):
    test_api = MySQLTestApi(settings.mysql)
    test_api.recreate_database(settings.database)
    mysql_api = MySQLApi(database=settings.database, mysql_settings=settings.mysql)
    yield ETicketDb(mysql_api)
    get_pool_manager().close_all_pools()
    test_api.drop_database(settings.database)


@pytest.mark.optional
def test_full_cycle(ticket_db, settings):
    drop_results = ticket_db.drop_tables()
    assert not any(r.ok for r in drop_results)

    assert all(r.ok for r in ticket_db.create_tables())
    assert all(ticket_db.table_status().values())

    assert ticket_db.populate_tables() == 27
    assert MySQLTestApi(settings.mysql).count_rows(settings.database, 'SeatMaps') == 5

    titles = [e.title for e in ticket_db.list_events()]
    assert titles == ['Drake Live Concert', 'Avengers: Endgame']

    assert [e.event_id for e in ticket_db.search_events_by_title('AVENGERS')] == [2]

    sales = ticket_db.event_sales_report()
    assert [(s.event_id, s.tickets_sold, s.revenue) for s in sales] == [
        (1, 1, Decimal('150.00')),
        (2, 1, Decimal('20.00')),
    ]

    availability = ticket_db.seat_availability(1)
    assert [(a.available, a.held, a.sold) for a in availability] == [(2, 1, 0)]

    assert all(r.ok for r in ticket_db.drop_tables())


@pytest.mark.optional
def test_constraints_enforced_by_server(ticket_db):
    ticket_db.create_tables()
    ticket_db.populate_tables()

    with pytest.raises(OperationError):
        ticket_db.add_event(3, 99, 'No Such Organizer', 'Concert')

    with pytest.raises(OperationError, match='foreign key constraint fails'):
        ticket_db.delete_event(1)

    assert ticket_db.add_event(3, 1, 'Jazz Night', 'Concert') == 1
    assert ticket_db.update_event_title(3, 'Late Jazz Night') == 1
    assert ticket_db.update_event_title(404, 'Nobody') == 0
    assert ticket_db.delete_event(3) == 1
    assert ticket_db.delete_event(3) == 0


@pytest.mark.optional
def test_populate_twice_rolls_back(ticket_db, settings):
    ticket_db.create_tables()
    ticket_db.populate_tables()

    with pytest.raises(OperationError, match='Duplicate entry'):
        ticket_db.populate_tables()

    assert MySQLTestApi(settings.mysql).count_rows(settings.database, 'Users') == 3
