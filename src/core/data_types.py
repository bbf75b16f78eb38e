"""
Core lightweight data types shared across modules.

These are transfer objects (Dataclasses), NOT database models.
Domain records live in src/intel/models.py.
"""
import json
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any


@dataclass
class AgentResult:
    """Normalised reply from the agent service.

    Every piece of the raw payload is type-checked on the way in, so callers
    can read ``result`` and ``artifact_files`` without guarding for shape.
    """
    success: bool
    result: Dict[str, Any] = field(default_factory=dict)
    artifact_files: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "AgentResult":
        if not isinstance(payload, dict):
            return cls(success=False, error="Malformed agent response")

        response = payload.get("response")
        result = response.get("result") if isinstance(response, dict) else None
        if isinstance(result, str):
            # Some agents return the structured result as a JSON string
            try:
                result = json.loads(result)
            except ValueError:
                result = None
        if not isinstance(result, dict):
            result = {}

        module_outputs = payload.get("module_outputs")
        files = module_outputs.get("artifact_files") if isinstance(module_outputs, dict) else None
        artifact_files = [f for f in files if isinstance(f, dict)] if isinstance(files, list) else []

        error = payload.get("error")
        return cls(
            success=payload.get("success") is True,
            result=result,
            artifact_files=artifact_files,
            error=error if isinstance(error, str) else None,
        )

    def first_artifact_url(self) -> str:
        """URL of the first artifact file, or an empty string."""
        if not self.artifact_files:
            return ""
        url = self.artifact_files[0].get("file_url")
        return url if isinstance(url, str) else ""
