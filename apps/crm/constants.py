from django.db import models
from django.utils.translation import gettext_lazy as _


class TaskType(models.TextChoices):
    TASK = "Task", _("Task")
    MEETING = "Meeting", _("Meeting")
    SHOOTING = "Shooting", _("Shooting")
    CALL = "Call", _("Call")
    POST = "Post", _("Post")
    REELS = "Reels", _("Reels")
    STORIES = "Stories", _("Stories")
    CONTENT_POST = "content_post", _("Content post")
    CONTENT_REEL = "content_reel", _("Content reel")
    CONTENT_STORY = "content_story", _("Content story")


class TaskStatus(models.TextChoices):
    TODO = "To Do", _("To Do")
    IN_PROGRESS = "In Progress", _("In Progress")
    REVIEW = "Review", _("Review")
    PENDING_CLIENT = "Pending Client", _("Pending Client")
    APPROVED = "Approved", _("Approved")
    REJECTED = "Rejected", _("Rejected")
    READY = "Ready", _("Ready")
    DONE = "Done", _("Done")


class TransactionType(models.TextChoices):
    INCOME = "income", _("Income")
    EXPENSE = "expense", _("Expense")
