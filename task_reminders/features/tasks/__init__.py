"""Tasks feature: recurring tasks and their reminder schedule."""
