"""
Run traces.

A RunTrace records which passes ran during one orchestrator invocation and
which words each of them changed, so an analysis can be explained after the
fact.
"""
import json
import uuid
from datetime import datetime, timezone


def _now():
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


class RunTrace:
    """
    Record of a single orchestrator run over one sentence.
    """
    def __init__(self, mode: str, sentence: str, span=None):
        self.trace_id = str(uuid.uuid4())
        self.start_time = _now()
        self.end_time = None
        self.mode = mode
        self.sentence = sentence
        self.span = [span.start, span.stop] if span is not None else None
        self.steps = []
        self.rounds = 0
        self.error = None

    def add_step(self, pass_name: str, tier: int, changed: list, description: str = None):
        """
        Adds a pass execution to the trace.

        Args:
            pass_name: Name of the pass as listed in the orchestrator table.
            tier: Priority tier the pass belongs to.
            changed: Indices of words whose state the pass changed.
            description: Optional human-readable note.
        """
        step = {
            "step_id": len(self.steps) + 1,
            "name": pass_name,
            "tier": tier,
            "timestamp": _now(),
            "changed": list(changed),
        }
        if description:
            step["description"] = description
        self.steps.append(step)

    @property
    def changed_words(self):
        """Every word index touched during the run."""
        return sorted({i for step in self.steps for i in step["changed"]})

    def finish(self, rounds: int):
        """Concludes the trace."""
        self.rounds = rounds
        self.end_time = _now()

    def set_error(self, error_message: str):
        """Records an error and concludes the trace."""
        self.error = error_message
        self.end_time = _now()

    def to_json(self, indent=2):
        """Serializes the trace to a JSON string."""
        return json.dumps(self, default=lambda o: o.__dict__, indent=indent, ensure_ascii=False)
