"""Base contract for workflow nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from llm_gateway.infrastructure.logging.logger import logger

NodeInput = Dict[str, Any]
NodeOutput = Dict[str, Any]


class NodeCategory(str, Enum):
    ENTRY = "entry"
    MIDDLE = "middle"
    EXIT = "exit"


@dataclass
class NodeConfig:
    """Static configuration a node is created with."""

    id: str
    name: str = ""
    category: Optional[NodeCategory] = None
    params: Dict[str, Any] = field(default_factory=dict)


class NodeBase:
    """A graph node: takes a dict input and returns a dict output.

    Subclasses implement ``_call``; errors propagate to the hosting graph.
    """

    node_name = "base"
    description = ""
    version = "1.0.0"

    def __init__(self, config: NodeConfig):
        self.config = config
        self.category = config.category or self.get_default_category()

    def get_default_category(self) -> NodeCategory:
        return NodeCategory.MIDDLE

    def call(self, input: NodeInput) -> NodeOutput:
        logger.info("node.start", extra={"extra": {"node": self.node_name, "id": self.config.id}})
        output = self._call(input)
        logger.info("node.end", extra={"extra": {"node": self.node_name, "id": self.config.id}})
        return output

    def _call(self, input: NodeInput) -> NodeOutput:
        raise NotImplementedError
