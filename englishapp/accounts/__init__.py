"""Admin, expert and student account records and their SQLite storage."""