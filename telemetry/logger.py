from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional


def _now_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%S", time.localtime())


@dataclass
class TelemetryLogger:
    """
    JSON-lines event log for the day cycle.

    Disabled until init() gives it a file. Step rows are sampled: one every
    ``sample_every_n_steps`` calls to tick_step().
    """
    path: Optional[Path] = None
    enabled: bool = True
    flush_each_write: bool = False
    sample_every_n_steps: int = 100
    _step_counter: int = 0
    _started_at: float = field(default_factory=time.time)

    def init(self, path: Path) -> None:
        self.path = path
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.touch(exist_ok=True)
        self.log("telemetry_init", file=str(self.path))

    def log(self, event: str, **fields: Any) -> None:
        if not self.enabled or self.path is None:
            return

        row: Dict[str, Any] = {
            "t": round(time.time() - self._started_at, 3),
            "ts": _now_iso(),
            "event": event,
            **fields,
        }

        try:
            with self.path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(row, ensure_ascii=False) + "\n")
                if self.flush_each_write:
                    f.flush()
        except OSError:
            # Telemetry must never break a time step.
            return

    def tick_step(self) -> int:
        self._step_counter += 1
        return self._step_counter

    def should_log_step(self) -> bool:
        return self.sample_every_n_steps > 0 and (self._step_counter % self.sample_every_n_steps == 0)


# global singleton (easy import everywhere)
telemetry = TelemetryLogger()
