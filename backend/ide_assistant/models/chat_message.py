from datetime import datetime

from sqlalchemy import JSON, Integer, String, Text, DateTime, ForeignKey, Index, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ide_assistant.db.base import Base


class ChatMessage(Base):
    __tablename__ = "chat_messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    thread_id: Mapped[int] = mapped_column(ForeignKey("chat_threads.id", ondelete="CASCADE"), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    kind: Mapped[str] = mapped_column(String(20), nullable=False, default="plain")  # plain, plan, build_result
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # kind == "plan"
    plan_json: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    plan_status: Mapped[str | None] = mapped_column(String(20), nullable=True)  # pending, approved, rejected, superseded
    plan_source: Mapped[str | None] = mapped_column(String(20), nullable=True)  # backend, heuristic
    # kind == "build_result"
    build_json: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    source_message_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    thread: Mapped["ChatThread"] = relationship("ChatThread", back_populates="messages")

    __table_args__ = (
        Index("ix_chat_messages_thread_id_plan_status", "thread_id", "plan_status"),
    )
