"""
CSV logging for simulation state with performance optimization.

Buffers data in memory and writes in batches to minimize I/O overhead.
Implements context manager protocol for safe resource handling.
"""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, TextIO

from loft.dynamics.body import Body

# Map fields to column suffixes
FIELD_COMPONENTS = {
    "r": ["x", "y", "z"],
    "cm": ["x", "y", "z"],
    "v": ["x", "y", "z"],
    "w": ["x", "y", "z"],
    "m": None,
}


class CSVLogger:
    """
    Buffered CSV logger for Universe state.

    One row per call to ``log``: the time, then the requested fields for every
    registered body. Header columns are named ``<body>.<field>_<axis>``.

    Parameters
    ----------
    filepath : str | Path
        Output CSV file path
    buffer_size : int
        Number of rows to buffer before writing
    fields : list[str] | None
        State fields to log per body. Default: ["r", "cm", "v", "w", "m"]
        Options: "r" (absolute origin), "cm" (absolute center of mass),
                 "v" (center-of-mass velocity), "w" (angular velocity),
                 "m" (aggregate mass)

    Notes
    -----
    The body list is fixed by the header written on the first call; bodies
    added afterwards are not logged. Captured bodies log their absolute pose
    and zero velocities.

    Examples
    --------
    >>> with CSVLogger("output.csv", fields=["cm", "v"]) as logger:
    ...     for _ in range(100):
    ...         universe.step(1.0)
    ...         logger.log(universe)
    """

    def __init__(
        self,
        filepath: str | Path,
        buffer_size: int = 1000,
        fields: list[str] | None = None
    ) -> None:
        self.filepath = Path(filepath)
        self.buffer_size = buffer_size
        self.fields = fields if fields is not None else list(FIELD_COMPONENTS)

        invalid = set(self.fields) - set(FIELD_COMPONENTS)
        if invalid:
            raise ValueError(
                f"Invalid fields: {invalid}. Valid options: {set(FIELD_COMPONENTS)}"
            )

        self._buffer: list[list[str]] = []
        self._file: TextIO | None = None
        self._writer: Any = None
        self._bodies: list[Body] | None = None

        self.filepath.parent.mkdir(parents=True, exist_ok=True)

    def __enter__(self) -> CSVLogger:
        """Open file for writing."""
        self._file = open(self.filepath, "w", newline="", encoding="utf-8")
        self._writer = csv.writer(self._file)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Close file, flushing any remaining data."""
        self.close()

    @staticmethod
    def _get_val(b: Body, field: str) -> Any:
        if field == "r":
            return b.absolute_position()
        if field == "cm":
            return b.absolute_center_of_mass()
        if field == "v":
            return b.velocity_of_cm()
        if field == "w":
            return b.angular_velocity()
        return b.mass()

    def _write_header(self, universe: Any) -> None:
        self._bodies = list(universe.bodies)
        hdr = ["t"]
        for b in self._bodies:
            for field in self.fields:
                suffixes = FIELD_COMPONENTS[field]
                if suffixes is None:
                    hdr.append(f"{b.name}.{field}")
                else:
                    hdr.extend(f"{b.name}.{field}_{s}" for s in suffixes)

        self._writer.writerow(hdr)
        self._file.flush()

    def log(self, universe: Any) -> None:
        """
        Append the current state of ``universe`` to the buffer.

        Opens the file on first call if not used as a context manager, and
        writes to disk when the buffer is full.
        """
        if self._file is None:
            self.__enter__()

        if self._bodies is None:
            self._write_header(universe)

        row = [f"{universe.t:.10f}"]
        for b in self._bodies:
            for field in self.fields:
                val = self._get_val(b, field)
                if FIELD_COMPONENTS[field] is None:
                    row.append(f"{val:.10e}")
                else:
                    row.extend(f"{v:.10e}" for v in val)

        self._buffer.append(row)

        if len(self._buffer) >= self.buffer_size:
            self.flush()

    def flush(self) -> None:
        """Write buffered data to disk and clear buffer."""
        if self._writer and self._buffer:
            self._writer.writerows(self._buffer)
            if self._file:
                self._file.flush()
            self._buffer.clear()

    def close(self) -> None:
        """Flush remaining data and close file."""
        self.flush()
        if self._file:
            self._file.close()
            self._file = None
            self._writer = None
