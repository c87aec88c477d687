import logging
from typing import Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    def __init__(self) -> None:
        self.leaderboard_connections: Set[WebSocket] = set()

    async def connect_leaderboard(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.leaderboard_connections.add(websocket)

    def disconnect_leaderboard(self, websocket: WebSocket) -> None:
        self.leaderboard_connections.discard(websocket)

    async def broadcast_leaderboard(self, payload: dict) -> None:
        connections = self.leaderboard_connections.copy()
        for connection in connections:
            try:
                await connection.send_json(payload)
            except (RuntimeError, OSError) as exc:
                logger.debug("Dropping leaderboard listener: %s", exc)
                self.disconnect_leaderboard(connection)

    async def score_updated(self, team_id: str, total_score: int, reason: str) -> None:
        await self.broadcast_leaderboard(
            {
                "type": "score_updated",
                "team_id": team_id,
                "total_score": total_score,
                "reason": reason,
            }
        )

    async def team_removed(self, team_id: str) -> None:
        await self.broadcast_leaderboard({"type": "team_removed", "team_id": team_id})

    @property
    def listener_count(self) -> int:
        return len(self.leaderboard_connections)


manager = ConnectionManager()
