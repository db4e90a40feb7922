"""Progress tracking, levelling, validation and account records for an English learning service."""

__version__ = "0.1.0"