"""Feature modules: users, categories, tasks and the reminder sweep."""
