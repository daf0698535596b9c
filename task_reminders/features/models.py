"""Import every model so ``Base.metadata`` knows all tables."""

from task_reminders.features.categories.models import Category
from task_reminders.features.tasks.models import Task
from task_reminders.features.users.models import User

__all__ = ["Category", "Task", "User"]
