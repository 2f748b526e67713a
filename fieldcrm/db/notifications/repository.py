"""Repository for inbox notifications."""

from datetime import UTC, datetime

from sqlalchemy import select, update

from fieldcrm.db.notifications.model import Notification
from fieldcrm.db.repository import CrudRepository
from fieldcrm.utils.logger import logger


class NotificationRepository(CrudRepository[Notification]):
    """Repository for managing notifications in the database."""

    model = Notification

    async def list_for_user(
        self, user_id: str, unread_only: bool = False
    ) -> list[Notification]:
        stmt = (
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc())
        )
        if unread_only:
            stmt = stmt.where(Notification.is_read == False)  # noqa: E712
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def mark_read(self, notification_id: str) -> Notification | None:
        notification = await self.get_by_id(notification_id)
        if not notification:
            return None
        if not notification.is_read:
            notification.is_read = True
            notification.read_at = datetime.now(UTC)
        return await self.save(notification)

    async def mark_all_read(self, user_id: str) -> int:
        """
        Mark every unread notification for a user as read.

        Returns:
            int: Number of notifications updated
        """
        stmt = (
            update(Notification)
            .where(Notification.user_id == user_id)
            .where(Notification.is_read == False)  # noqa: E712
            .values(is_read=True, read_at=datetime.now(UTC))
        )
        result = await self.session.execute(stmt)
        updated_count = result.rowcount
        logger.info(
            f"[NotificationRepository] Marked {updated_count} notifications read for user {user_id}"
        )
        return updated_count
