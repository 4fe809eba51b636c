"""
Club Repository
Data access for clubs, memberships and the event rows clubs own
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from databases import Database
from clubhub.models.club import JoinState

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    """Current UTC time, naive, matching the stored column type"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


CLUB_COLUMNS = "c.id, c.name, c.description, c.owner_id, c.max_capacity"


class ClubRepository:
    """
    Data access for club operations

    Performs no business validation. Every write touching more than one row
    runs inside a single transaction.
    """

    def __init__(self, database: Database):
        self.database = database

    async def _lock_club(self, club_id: int) -> None:
        """
        Serialize writers on a club row (PostgreSQL only)

        SQLite runs the conditional write as one atomic statement; a plain
        read first would take a SHARED lock that overlapping writers cannot
        upgrade.
        """
        if self.database.url.dialect != "postgresql":
            return
        await self.database.fetch_one(
            "SELECT c.id FROM clubs c WHERE c.id = :club_id FOR UPDATE",
            {"club_id": club_id}
        )

    # ---- lookups ----

    async def club_name_exists(self, name: str) -> bool:
        row = await self.database.fetch_one(
            "SELECT id FROM clubs WHERE name = :name",
            {"name": name}
        )
        return row is not None

    async def get_club_by_id(self, club_id: int) -> Optional[dict]:
        row = await self.database.fetch_one(
            f"SELECT {CLUB_COLUMNS} FROM clubs c WHERE c.id = :club_id",
            {"club_id": club_id}
        )
        return dict(row._mapping) if row else None

    async def get_club_by_name(self, name: str) -> Optional[dict]:
        row = await self.database.fetch_one(
            f"SELECT {CLUB_COLUMNS} FROM clubs c WHERE c.name = :name",
            {"name": name}
        )
        return dict(row._mapping) if row else None

    async def get_clubs(self) -> list[dict]:
        rows = await self.database.fetch_all(
            f"SELECT {CLUB_COLUMNS} FROM clubs c ORDER BY c.id"
        )
        return [dict(row._mapping) for row in rows]

    async def get_my_clubs(self, user_id: int) -> list[dict]:
        """Clubs where the user holds a JOINED membership"""
        rows = await self.database.fetch_all(
            f"""
            SELECT {CLUB_COLUMNS}
            FROM clubs c
            JOIN club_joins cj ON cj.club_id = c.id
            WHERE cj.user_id = :user_id AND cj.join_state = :joined
            ORDER BY c.id
            """,
            {"user_id": user_id, "joined": JoinState.JOINED.value}
        )
        return [dict(row._mapping) for row in rows]

    async def get_join_state(self, club_id: int, user_id: int) -> Optional[JoinState]:
        """Membership state of a non-deleted user, or None when absent"""
        join_state = await self.database.fetch_val(
            """
            SELECT cj.join_state
            FROM club_joins cj
            JOIN users u ON u.id = cj.user_id
            WHERE cj.club_id = :club_id
              AND cj.user_id = :user_id
              AND u.deleted_at IS NULL
            """,
            {"club_id": club_id, "user_id": user_id}
        )
        return JoinState(join_state) if join_state else None

    async def count_joined_users(self, club_id: int) -> int:
        count = await self.database.fetch_val(
            """
            SELECT COUNT(*)
            FROM club_joins cj
            JOIN users u ON u.id = cj.user_id
            WHERE cj.club_id = :club_id
              AND cj.join_state = :joined
              AND u.deleted_at IS NULL
            """,
            {"club_id": club_id, "joined": JoinState.JOINED.value}
        )
        return count or 0

    # ---- writes ----

    async def create_club(
        self,
        owner_id: int,
        name: str,
        description: str,
        max_capacity: int
    ) -> dict:
        """Insert the club and the owner's JOINED membership together"""
        async with self.database.transaction():
            await self.database.execute(
                """
                INSERT INTO clubs (name, description, owner_id, max_capacity)
                VALUES (:name, :description, :owner_id, :max_capacity)
                """,
                {
                    "name": name,
                    "description": description,
                    "owner_id": owner_id,
                    "max_capacity": max_capacity
                }
            )
            club = await self.get_club_by_name(name)
            await self.database.execute(
                """
                INSERT INTO club_joins (club_id, user_id, join_state)
                VALUES (:club_id, :user_id, :joined)
                """,
                {
                    "club_id": club["id"],
                    "user_id": owner_id,
                    "joined": JoinState.JOINED.value
                }
            )
        return club

    async def join_club(self, club_id: int, user_id: int, max_capacity: int) -> bool:
        """
        Insert a PENDING membership if the club still has a free slot

        Returns:
            True if the row was inserted, False if the club was full
        """
        async with self.database.transaction():
            await self._lock_club(club_id)
            await self.database.execute(
                """
                INSERT INTO club_joins (club_id, user_id, join_state)
                SELECT CAST(:club_id AS INTEGER), CAST(:user_id AS INTEGER), :pending
                WHERE (
                    SELECT COUNT(*)
                    FROM club_joins cj
                    JOIN users u ON u.id = cj.user_id
                    WHERE cj.club_id = :club_id
                      AND cj.join_state = :joined
                      AND u.deleted_at IS NULL
                ) < :max_capacity
                """,
                {
                    "club_id": club_id,
                    "user_id": user_id,
                    "pending": JoinState.PENDING.value,
                    "joined": JoinState.JOINED.value,
                    "max_capacity": max_capacity
                }
            )
            inserted = await self.get_join_state(club_id, user_id)
        return inserted is not None

    async def approve_join(self, club_id: int, user_id: int, max_capacity: int) -> bool:
        """
        Move a PENDING membership to JOINED if the club still has a free slot

        Returns:
            True if the membership is now JOINED
        """
        async with self.database.transaction():
            await self._lock_club(club_id)
            await self.database.execute(
                """
                UPDATE club_joins
                SET join_state = :joined
                WHERE club_id = :club_id
                  AND user_id = :user_id
                  AND join_state = :pending
                  AND (
                    SELECT COUNT(*)
                    FROM club_joins cj
                    JOIN users u ON u.id = cj.user_id
                    WHERE cj.club_id = :club_id
                      AND cj.join_state = :joined
                      AND u.deleted_at IS NULL
                  ) < :max_capacity
                """,
                {
                    "club_id": club_id,
                    "user_id": user_id,
                    "pending": JoinState.PENDING.value,
                    "joined": JoinState.JOINED.value,
                    "max_capacity": max_capacity
                }
            )
            join_state = await self.get_join_state(club_id, user_id)
        return join_state == JoinState.JOINED

    async def update_club(self, club_id: int, data: dict) -> dict:
        """Write only the supplied columns"""
        if data:
            assignments = ", ".join(f"{column} = :{column}" for column in data)
            await self.database.execute(
                f"UPDATE clubs SET {assignments}, updated_at = CURRENT_TIMESTAMP WHERE id = :club_id",
                {**data, "club_id": club_id}
            )
        return await self.get_club_by_id(club_id)

    async def delegate_owner(self, club_id: int, new_owner_id: int) -> dict:
        await self.database.execute(
            """
            UPDATE clubs
            SET owner_id = :owner_id, updated_at = CURRENT_TIMESTAMP
            WHERE id = :club_id
            """,
            {"club_id": club_id, "owner_id": new_owner_id}
        )
        return await self.get_club_by_id(club_id)

    async def delete_club(self, club_id: int) -> None:
        """
        Delete a club with its memberships

        Events that have not started are deleted. Started events are kept,
        detached from the club and archived.
        """
        now = _utc_now()
        params = {"club_id": club_id, "now": now}

        async with self.database.transaction():
            await self.database.execute(
                """
                DELETE FROM event_joins
                WHERE event_id IN (
                    SELECT id FROM events
                    WHERE club_id = :club_id AND start_time > :now
                )
                """,
                params
            )
            await self.database.execute(
                "DELETE FROM events WHERE club_id = :club_id AND start_time > :now",
                params
            )
            await self.database.execute(
                """
                UPDATE events
                SET club_id = NULL, is_archived = :archived
                WHERE club_id = :club_id AND start_time <= :now
                """,
                {**params, "archived": True}
            )
            await self.database.execute(
                "DELETE FROM club_joins WHERE club_id = :club_id",
                {"club_id": club_id}
            )
            await self.database.execute(
                "DELETE FROM clubs WHERE id = :club_id",
                {"club_id": club_id}
            )
        logger.debug("Deleted club %s and resolved its events", club_id)

    async def out_club(self, club_id: int, user_id: int) -> None:
        """
        Remove a membership and the user's upcoming event entanglements

        Upcoming events the user hosts in the club are deleted. For upcoming
        events hosted by others only the user's participation is removed.
        """
        now = _utc_now()
        params = {"club_id": club_id, "user_id": user_id, "now": now}

        async with self.database.transaction():
            await self.database.execute(
                """
                DELETE FROM event_joins
                WHERE event_id IN (
                    SELECT id FROM events
                    WHERE club_id = :club_id
                      AND host_id = :user_id
                      AND start_time > :now
                )
                """,
                params
            )
            await self.database.execute(
                """
                DELETE FROM events
                WHERE club_id = :club_id
                  AND host_id = :user_id
                  AND start_time > :now
                """,
                params
            )
            await self.database.execute(
                """
                DELETE FROM event_joins
                WHERE user_id = :user_id
                  AND event_id IN (
                    SELECT id FROM events
                    WHERE club_id = :club_id
                      AND host_id <> :user_id
                      AND start_time > :now
                  )
                """,
                params
            )
            await self.database.execute(
                "DELETE FROM club_joins WHERE club_id = :club_id AND user_id = :user_id",
                {"club_id": club_id, "user_id": user_id}
            )
        logger.debug("User %s left club %s", user_id, club_id)
