#!/usr/bin/env python3

import argparse
import logging
import sys

from mysql.connector import Error as MySQLError

from .config import Settings
from .menu import ConsoleMenu
from .mysql_api import MySQLApi
from .ticket_db import ETicketDb


logger = logging.getLogger(__name__)

MODES = [
    "menu",
    "status",
    "drop_tables",
    "create_tables",
    "populate",
    "reset",
    "list_events",
    "search_events",
    "add_event",
    "update_event_title",
    "delete_event",
    "sales_report",
    "seat_availability",
]


def set_logging_config(tags, log_level_str=None):
    """Configure logging to stderr so program output on stdout stays clean."""
    handlers = [logging.StreamHandler(sys.stderr)]

    log_levels = {
        'critical': logging.CRITICAL,
        'error': logging.ERROR,
        'warning': logging.WARNING,
        'info': logging.INFO,
        'debug': logging.DEBUG,
    }

    log_level = log_levels.get(log_level_str)
    if log_level is None:
        logging.warning(f'Unknown log level {log_level_str}, setting info')
        log_level = logging.INFO

    logging.basicConfig(
        level=log_level,
        format=f'[{tags} %(asctime)s %(levelname)8s] %(message)s',
        handlers=handlers,
        force=True,
    )


def build_parser():
    parser = argparse.ArgumentParser(
        prog="eticket-db",
        description="Drop, create, populate and query the e-ticket schema",
    )
    parser.add_argument(
        "mode", help="run mode (default: interactive menu)",
        type=str, nargs="?", default="menu", choices=MODES,
    )
    parser.add_argument("--config", help="config file path", default='config.yaml', type=str)
    parser.add_argument("--log-level", help="override log_level from config", type=str, default=None)
    parser.add_argument("--event-id", type=int, default=None)
    parser.add_argument("--organizer-id", type=int, default=None)
    parser.add_argument("--title", type=str, default=None)
    parser.add_argument("--category", type=str, default=None)
    parser.add_argument("--description", type=str, default="")
    parser.add_argument("--keyword", type=str, default=None, help="title keyword for search_events")
    parser.add_argument("--showtime-id", type=int, default=None, help="limit seat_availability to one showtime")
    return parser


def check_required(parser, args):
    required = {
        "search_events": ["keyword"],
        "add_event": ["event_id", "organizer_id", "title", "category"],
        "update_event_title": ["event_id", "title"],
        "delete_event": ["event_id"],
    }
    missing = [name for name in required.get(args.mode, []) if getattr(args, name) is None]
    if missing:
        flags = ", ".join("--" + name.replace("_", "-") for name in missing)
        parser.error(f"{args.mode} requires {flags}")


def run_reset(menu: ConsoleMenu) -> bool:
    menu.drop_tables()
    if not menu.create_tables():
        return False
    return menu.populate_tables()


def run_mode(args, menu: ConsoleMenu) -> bool:
    if args.mode == "menu":
        menu.run()
        return True
    if args.mode == "status":
        return menu.table_status()
    if args.mode == "drop_tables":
        return menu.drop_tables()
    if args.mode == "create_tables":
        return menu.create_tables()
    if args.mode == "populate":
        return menu.populate_tables()
    if args.mode == "reset":
        return run_reset(menu)
    if args.mode == "list_events":
        return menu.list_events()
    if args.mode == "search_events":
        return menu.do_search_events(args.keyword)
    if args.mode == "add_event":
        return menu.do_add_event(
            args.event_id, args.organizer_id, args.title, args.category, args.description,
        )
    if args.mode == "update_event_title":
        return menu.do_update_event_title(args.event_id, args.title)
    if args.mode == "delete_event":
        return menu.do_delete_event(args.event_id)
    if args.mode == "sales_report":
        return menu.sales_report()
    if args.mode == "seat_availability":
        return menu.do_seat_availability(args.showtime_id)
    raise ValueError(f"unknown mode {args.mode}")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    check_required(parser, args)

    config = Settings()
    config.load(args.config)
    if args.log_level is not None:
        config.log_level = args.log_level
        config.validate_log_level()

    set_logging_config(f'eticket {args.mode}', log_level_str=config.log_level)

    try:
        mysql_api = MySQLApi(database=config.database, mysql_settings=config.mysql)
        version = mysql_api.ping()
    except MySQLError as e:
        logger.critical(
            f"Could not connect to MySQL at {config.mysql.host}:{config.mysql.port}: {e}"
        )
        return 1
    logger.info(f"Connected to MySQL {version} as {config.mysql.user}, database '{config.database}'")

    menu = ConsoleMenu(ETicketDb(mysql_api), separator=config.row_separator)
    ok = run_mode(args, menu)
    mysql_api.close()
    return 0 if ok else 1


if __name__ == '__main__':
    sys.exit(main())
