from .app import App, AppMember
from .block import Block
from .block_version import BlockVersion
from .approval_request import ApprovalRequest

__all__ = ["App", "AppMember", "Block", "BlockVersion", "ApprovalRequest"]
