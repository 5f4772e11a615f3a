"""Command dispatch and the services built around it."""

from chat_commands.services.commands import CommandService
from chat_commands.services.dispatcher import RULES, CommandDispatcher, Rule
from chat_commands.services.questions import QuestionService
from chat_commands.services.registry import Services, get_services, reset_services
from chat_commands.services.users import UserService

__all__ = [
    "CommandDispatcher",
    "CommandService",
    "get_services",
    "QuestionService",
    "reset_services",
    "Rule",
    "RULES",
    "Services",
    "UserService",
]
