import logging

import uvicorn
from django.conf import settings
from django.core.management import call_command
from django.core.management.base import BaseCommand

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Creates the tasks table if needed and serves the API with uvicorn.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--host',
            default=settings.HOST,
            help='Bind address (default: HOST env or 0.0.0.0)',
        )
        parser.add_argument(
            '--port',
            type=int,
            default=settings.PORT,
            help='Listening port (default: PORT env or 3000)',
        )
        parser.add_argument(
            '--no-migrate',
            action='store_true',
            help='Skip applying migrations before starting',
        )

    def handle(self, *args, **options):
        if not options['no_migrate']:
            # Idempotent: only missing tables are created
            call_command('migrate', interactive=False, verbosity=0)
            logger.info("Database schema is up to date")

        logger.info(f"Server is running on port {options['port']}")
        uvicorn.run(
            'config.asgi:application',
            host=options['host'],
            port=options['port'],
            log_level=settings.LOG_LEVEL.lower(),
        )
