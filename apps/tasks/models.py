from django.db import models
from django.db.models.functions import Now

TITLE_MAX_LENGTH = 255


class Task(models.Model):
    """
    A single to-do item.
    Rows are removed physically on delete; there is no soft-delete flag.
    """
    # AUTOINCREMENT on SQLite, so ids are never handed out twice
    id = models.AutoField(primary_key=True)
    title = models.CharField(max_length=TITLE_MAX_LENGTH)
    description = models.TextField(null=True, blank=True)
    completed = models.BooleanField(db_default=False)

    # Set explicitly by TaskStore; the DB defaults cover raw inserts
    created_at = models.DateTimeField(db_default=Now(), editable=False)
    updated_at = models.DateTimeField(db_default=Now())

    class Meta:
        db_table = 'tasks'
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"#{self.id} {self.title}"
