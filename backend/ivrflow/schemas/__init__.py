"""Pydantic schemas for API request/response validation."""

from ivrflow.schemas.base import (
    BaseResponse,
    BaseSchema,
    ErrorResponse,
    MessageResponse,
)
from ivrflow.schemas.flow import (
    ConnectionRequest,
    EdgeResponse,
    FlowCreate,
    FlowCreatedEnvelope,
    FlowEnvelope,
    FlowListEnvelope,
    FlowResponse,
    FlowSummary,
    FlowUpdate,
    GraphResponse,
    MoveRequest,
    NodeEnvelope,
    NodeInput,
    NodeResponse,
    Position,
    SequenceNodeCreate,
    SequenceNodeResponse,
    SequenceResponse,
)
from ivrflow.schemas.project import (
    ProjectCreate,
    ProjectCreatedEnvelope,
    ProjectDetail,
    ProjectDetailEnvelope,
    ProjectEnvelope,
    ProjectListEnvelope,
    ProjectListItem,
    ProjectResponse,
    ProjectUpdate,
)
from ivrflow.schemas.token import (
    TokenCreate,
    TokenCreatedEnvelope,
    TokenEnvelope,
    TokenListEnvelope,
    TokenResponse,
    TokenUpdate,
)
from ivrflow.schemas.user import (
    AccessTokenResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)

__all__ = [
    # Base
    "BaseResponse",
    "BaseSchema",
    "ErrorResponse",
    "MessageResponse",
    # User
    "AccessTokenResponse",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    # Project
    "ProjectCreate",
    "ProjectCreatedEnvelope",
    "ProjectDetail",
    "ProjectDetailEnvelope",
    "ProjectEnvelope",
    "ProjectListEnvelope",
    "ProjectListItem",
    "ProjectResponse",
    "ProjectUpdate",
    # Token
    "TokenCreate",
    "TokenCreatedEnvelope",
    "TokenEnvelope",
    "TokenListEnvelope",
    "TokenResponse",
    "TokenUpdate",
    # Flow
    "ConnectionRequest",
    "EdgeResponse",
    "FlowCreate",
    "FlowCreatedEnvelope",
    "FlowEnvelope",
    "FlowListEnvelope",
    "FlowResponse",
    "FlowSummary",
    "FlowUpdate",
    "GraphResponse",
    "MoveRequest",
    "NodeEnvelope",
    "NodeInput",
    "NodeResponse",
    "Position",
    "SequenceNodeCreate",
    "SequenceNodeResponse",
    "SequenceResponse",
]
