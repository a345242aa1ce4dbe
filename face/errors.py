class FaceError(Exception):
    """Base exception for dashboard domain errors."""

    pass


class UnknownAgentError(FaceError):
    """Raised when an agent id is not present in the agent config."""

    def __init__(self, agent_id: str):
        super().__init__(f"Agent '{agent_id}' not in config")
        self.agent_id = agent_id


class MalformedRequestError(FaceError):
    """Raised when a manual append is missing required fields."""

    pass


class PersistenceError(FaceError):
    """Raised when a JSON document cannot be written."""

    def __init__(self, name: str, cause: Exception):
        super().__init__(f"Failed to save {name}: {cause}")
        self.name = name
        self.cause = cause
