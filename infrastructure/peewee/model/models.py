from peewee import CharField, DateTimeField, Model

from infrastructure.peewee.session.db import db


class TaskModel(Model):
    id = CharField(primary_key=True)
    title = CharField(max_length=255)
    status = CharField()
    priority = CharField()
    created_at = DateTimeField()
    due_date = DateTimeField(null=True, index=True)

    class Meta:
        database = db
        table_name = "tasks"
