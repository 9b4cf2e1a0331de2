"""
step.py — Algorithm Step Snapshot
==================================
Every algorithm is a generator that yields Step objects.
A Step is a frozen-in-time picture of everything a renderer
needs to draw one frame:

    • The full visible state of the data structure (the snapshot)
    • Which indices / keys / nodes to emphasise right now
    • Which line of pseudocode is executing, plus the live variables
    • A plain-English narration of what just happened
    • Running counters (comparisons, swaps, …)

Design decisions:
  - Step is a plain frozen dataclass.  It is a SNAPSHOT.  The algorithm
    generator is the only writer; the stepper / API are pure readers.
  - Generators mutate their own working structures freely, but every
    collection handed to StepBuilder.build() is deep-copied, so a Step
    never aliases live state.  Replaying step i always shows the same
    frame no matter what ran before or after it.
  - `snapshot` is a free-form dict so each algorithm can describe its
    own structure (array + capacity, tree nodes, buckets, grid scores, …).
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number : 0-based index of this step in the run.
        operation   : Tag for the action this step represents
                      ("init", "compare", "swap", "resize", "done", …).
        snapshot    : Deep copy of the data structure at this instant.
        highlights  : Indices / keys / node ids the renderer should emphasise.
        description : Human-readable narration.
        code_line   : 0-based index into the algorithm's PSEUDOCODE (-1 = none).
        variables   : Live variable values shown next to the code panel.
        metrics     : Cumulative counters for the whole run so far.
        is_final    : True on the very last step.
    """

    step_number:  int                = 0
    operation:    str                = "init"
    snapshot:     Dict[str, Any]     = field(default_factory=dict)
    highlights:   Dict[str, Any]     = field(default_factory=dict)
    description:  str                = ""
    code_line:    int                = -1
    variables:    Dict[str, Any]     = field(default_factory=dict)
    metrics:      Dict[str, int]     = field(default_factory=dict)
    is_final:     bool               = False

    # ------------------------------------------------------------------
    # Serialisation  (for the JSON API / export)
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "step_number": self.step_number,
            "operation":   self.operation,
            "snapshot":    _jsonable(self.snapshot),
            "highlights":  _jsonable(self.highlights),
            "description": self.description,
            "code_line":   self.code_line,
            "variables":   _jsonable(self.variables),
            "metrics":     dict(self.metrics),
            "is_final":    self.is_final,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Step":
        return cls(
            step_number=data.get("step_number", 0),
            operation=data.get("operation", "init"),
            snapshot=copy.deepcopy(data.get("snapshot", {})),
            highlights=copy.deepcopy(data.get("highlights", {})),
            description=data.get("description", ""),
            code_line=data.get("code_line", -1),
            variables=copy.deepcopy(data.get("variables", {})),
            metrics=dict(data.get("metrics", {})),
            is_final=data.get("is_final", False),
        )


# ---------------------------------------------------------------------------
# Convenience builder so algorithms don't have to spell out every kwarg
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Mutable scratch-pad that algorithms use to construct Steps cleanly.
    Owns the running step counter and the cumulative metrics.

    Usage inside an algorithm generator:
        sb = StepBuilder(counters=("comparisons", "swaps"))
        sb.count("comparisons")
        yield sb.emit("compare", f"Compare {a} and {b}", {"array": arr},
                      code_line=3, indices=(i, j))
    """

    def __init__(self, counters: Iterable[str] = ()):
        self.step_number: int            = 0
        self.metrics:     Dict[str, int] = {name: 0 for name in counters}
        self.reset()

    def reset(self):
        """Clear the per-step fields.  Metrics and the step counter persist."""
        self.operation:   str             = "init"
        self.highlights:  Dict[str, Any]  = {}
        self.description: str             = ""
        self.code_line:   int             = -1
        self.variables:   Dict[str, Any]  = {}

    # -- helpers --
    def count(self, metric: str, by: int = 1) -> int:
        self.metrics[metric] = self.metrics.get(metric, 0) + by
        return self.metrics[metric]

    def highlight(self, **marks: Any):
        self.highlights.update(marks)

    def build(self, snapshot: Dict[str, Any], is_final: bool = False) -> Step:
        step = Step(
            step_number=self.step_number,
            operation=self.operation,
            snapshot=copy.deepcopy(snapshot),
            highlights=copy.deepcopy(self.highlights),
            description=self.description,
            code_line=self.code_line,
            variables=copy.deepcopy(self.variables),
            metrics=dict(self.metrics),
            is_final=is_final,
        )
        self.step_number += 1
        return step

    def emit(
        self,
        operation: str,
        description: str,
        snapshot: Dict[str, Any],
        code_line: int = -1,
        variables: Optional[Dict[str, Any]] = None,
        is_final: bool = False,
        **highlights: Any,
    ) -> Step:
        """reset() + fill + build() in one call."""
        self.reset()
        self.operation   = operation
        self.description = description
        self.code_line   = code_line
        self.variables   = dict(variables or {})
        self.highlight(**highlights)
        return self.build(snapshot, is_final=is_final)

    def done(self, description: str, snapshot: Dict[str, Any], **highlights: Any) -> Step:
        """The closing step every generator ends with."""
        return self.emit("done", description, snapshot, is_final=True, **highlights)


def _jsonable(value: Any) -> Any:
    """Tuples → lists, recursively, so the result survives a JSON round trip."""
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value
