from .user import User
from .creator import Creator
from .message import Message, TAG_CHOICES, PRODUCT_CATEGORY_CHOICES
from .reply import Reply
from .reaction import Reaction
from .creator_feedback import CreatorFeedback, CATEGORY_CHOICES

__all__ = [
    "User",
    "Creator",
    "Message",
    "Reply",
    "Reaction",
    "CreatorFeedback",
    "TAG_CHOICES",
    "PRODUCT_CATEGORY_CHOICES",
    "CATEGORY_CHOICES",
]
