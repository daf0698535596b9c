"""Reminder sweep: select due tasks, notify owners, advance schedules."""
