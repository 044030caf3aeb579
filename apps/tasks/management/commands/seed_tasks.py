from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand

from apps.tasks.models import Task
from apps.tasks.services import TaskStore

SAMPLE_TASKS = [
    ("Buy milk", "Two liters, semi-skimmed", False),
    ("Ship release", "Tag, build and publish", True),
    ("Write changelog", None, False),
    ("Review open pull requests", "Oldest first", False),
    ("Renew TLS certificate", None, True),
]


class Command(BaseCommand):
    help = 'Seeds the tasks table with sample data for local development.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clean',
            action='store_true',
            help='Delete existing tasks before seeding',
        )
        parser.add_argument(
            '--count',
            type=int,
            default=len(SAMPLE_TASKS),
            help='Number of tasks to create (samples repeat when exceeded)',
        )

    def handle(self, *args, **options):
        if options['clean']:
            deleted, _ = Task.objects.all().delete()
            self.stdout.write(self.style.WARNING(f"Deleted {deleted} existing tasks"))

        store = TaskStore()
        insert = async_to_sync(store.insert)

        for i in range(options['count']):
            title, description, completed = SAMPLE_TASKS[i % len(SAMPLE_TASKS)]
            if i >= len(SAMPLE_TASKS):
                title = f"{title} ({i // len(SAMPLE_TASKS) + 1})"
            task = insert(title, description, completed)
            self.stdout.write(f"  Created task #{task.id}: {task.title}")

        self.stdout.write(self.style.SUCCESS(f"Seeded {options['count']} tasks"))
