"""
Agent framework
Shared types, the BaseAgent class every prompt-building agent extends and
a name -> agent registry.
"""
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ValidationError

from copilot import llm


def _as_list(value):
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return value


# A single string from the model becomes a one item list
StrList = Annotated[list[str], BeforeValidator(_as_list)]


def validate_items(items, model: type[BaseModel]) -> list[dict]:
    """
    Validate a JSON array from the model against a pydantic model.
    Entries that are not objects or fail validation are dropped; null
    values fall back to the field defaults.
    """
    valid = []
    for item in items or []:
        if not isinstance(item, dict):
            continue
        try:
            record = model.model_validate({k: v for k, v in item.items() if v is not None})
        except ValidationError as e:
            print(f"⚠️ [AGENT] Dropped invalid {model.__name__}: {e.error_count()} errors")
            continue
        valid.append(record.model_dump())
    return valid


class IntentType(Enum):
    BRAINSTORM = "brainstorm"            # look for new opportunities
    CASE_SEARCH = "case_search"
    SALES_SCRIPT = "sales_script"
    ROI_ESTIMATE = "roi_estimate"
    TREND_DISCOVERY = "trend_discovery"
    GENERAL_CHAT = "general_chat"
    UNKNOWN = "unknown"


@dataclass
class ConversationMessage:
    role: str                   # user | assistant | system
    content: str
    timestamp: float = field(default_factory=time.time)


@dataclass
class AgentContext:
    user_id: str | None = None
    session_id: str | None = None
    conversation_history: list[ConversationMessage] = field(default_factory=list)
    metadata: dict = field(default_factory=dict)


@dataclass
class AgentInput:
    task: str
    context: AgentContext | None = None
    params: dict = field(default_factory=dict)


@dataclass
class AgentOutput:
    success: bool
    data: Any
    error: str | None = None
    metadata: dict | None = None


@dataclass
class AgentCapability:
    name: str
    description: str


@dataclass
class IntentRecognitionResult:
    intent: IntentType
    confidence: float
    entities: dict = field(default_factory=dict)
    suggested_tasks: list[str] = field(default_factory=list)


@dataclass
class TaskResult:
    agent_name: str
    task: str
    success: bool
    data: Any
    error: str | None = None
    duration: float = 0.0       # seconds


@dataclass
class OrchestrationResult:
    success: bool
    intent: IntentRecognitionResult
    tasks: list[TaskResult]
    final_output: str
    metadata: dict = field(default_factory=dict)


class BaseAgent(ABC):
    name = "BaseAgent"
    description = ""
    capabilities: list[AgentCapability] = []

    @abstractmethod
    def execute(self, agent_input: AgentInput) -> AgentOutput:
        ...

    def can_handle(self, task: str) -> bool:
        """True when the task text mentions a capability name or description."""
        task = task.lower()
        return any(
            cap.name.lower() in task or cap.description.lower() in task
            for cap in self.capabilities
        )

    def call_llm(self, prompt: str, model: str = None) -> str:
        return llm.call_llm(prompt, model=model)

    def build_prompt(self, template: str, params: dict) -> str:
        prompt = template
        for key, value in params.items():
            prompt = prompt.replace(f"{{{key}}}", str(value))
        return prompt

    def success_output(self, data, metadata: dict = None) -> AgentOutput:
        return AgentOutput(success=True, data=data, metadata=metadata)

    def error_output(self, error: str) -> AgentOutput:
        print(f"❌ [AGENT] {self.name}: {error}")
        return AgentOutput(success=False, data=None, error=error)


class AgentFactory:
    """Process-wide registry of agent instances by name."""
    _agents: dict[str, BaseAgent] = {}

    @classmethod
    def register(cls, agent: BaseAgent):
        cls._agents[agent.name] = agent

    @classmethod
    def get(cls, name: str) -> BaseAgent | None:
        return cls._agents.get(name)

    @classmethod
    def get_all(cls) -> list[BaseAgent]:
        return list(cls._agents.values())

    @classmethod
    def clear(cls):
        cls._agents.clear()
