from ide_assistant.models.project import Project
from ide_assistant.models.project_file import ProjectFile
from ide_assistant.models.chat_thread import ChatThread
from ide_assistant.models.chat_message import ChatMessage

__all__ = ["Project", "ProjectFile", "ChatThread", "ChatMessage"]
