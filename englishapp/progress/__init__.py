"""Lesson and course progress: models, SQLite storage, service and event consumer."""