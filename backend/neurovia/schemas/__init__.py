from .auth import AdminLoginRequest, AdminPublic, Token
from .state import PurchasedComponent, Round1State, Round2State, Round3State, SchematicSlot
from .team import TeamPublic, TeamRegisterRequest, TeamRegisterResponse

__all__ = [
    "AdminLoginRequest",
    "AdminPublic",
    "Token",
    "PurchasedComponent",
    "Round1State",
    "Round2State",
    "Round3State",
    "SchematicSlot",
    "TeamPublic",
    "TeamRegisterRequest",
    "TeamRegisterResponse",
]
