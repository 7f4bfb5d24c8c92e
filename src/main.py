"""Main entry point for ado.

Loads settings, configures logging, opens the configured backend and runs
the shell.
"""
import logging
from cli import CLI
from config import load_settings
from logging_setup import setup_logging
from picker import TaskPicker
from storage import TaskStore, open_store

logger = logging.getLogger(__name__)

# (name, status) pairs the demo list starts with; status is one of
# 'open', 'done', 'wont'.
DEMO_TASKS = (
    ("Start making ado", 'done'),
    ("Try rusqlite", 'done'),
    ("Implement a onion architecture", 'wont'),
    ("Start simplified rewrite of ado", 'done'),
    ("Refine the design of ado", 'open'),
    ("Make ado interactive", 'done'),
    ("Implement new task creation", 'open'),
    ("Implement persistence", 'open'),
    ("Have ado use unbuffered input", 'done'),
    ("Eliminate the 'history' e.g. by redrawing the screen", 'done'),
    ("Implement task status toggling (done/open)", 'done'),
    ("Implement task status toggling (open/abandoned)", 'open'),
    ("Hide the cursor", 'done'),
)


def seed_demo(store: TaskStore) -> None:
    for name, status in DEMO_TASKS:
        if status == 'done':
            store.create_finished(name)
        elif status == 'wont':
            store.create_abandoned(name)
        else:
            store.create(name)


def main():
    settings = load_settings()
    setup_logging(settings.resolved_log_file, settings.log_level)
    store = open_store(settings)
    if settings.demo and settings.backend == 'memory':
        seed_demo(store)
    logger.info('Starting ado backend=%s tasks=%d', settings.backend, len(store))
    CLI(TaskPicker(store), alt_screen=settings.alt_screen).run()

if __name__ == "__main__":
    main()
