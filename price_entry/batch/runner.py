"""Evaluate a batch of entry lines using worker processes."""
from multiprocessing import Pipe, Process, cpu_count
from multiprocessing.connection import Connection, wait
from pathlib import Path
from typing import IO, List, Tuple

from pydantic import BaseModel, ConfigDict, Field

from price_entry.batch.worker import EntryWorker
from price_entry.common.logger import logger
from price_entry.common.messages import DEFAULT_LANGUAGE


class BatchRunner(BaseModel):
    """
    Parse many entry lines in parallel and write one result line per entry.

    Features:
        - Spawns one worker process per line.
        - Writes results immediately to disk as soon as a worker finishes.
        - Ensures each worker is destroyed immediately after finishing.
        - Keeps at most ``max_workers`` workers alive at once.
    """

    # Allow arbitrary types like multiprocessing.Connection
    model_config = ConfigDict(arbitrary_types_allowed=True)

    output_file: Path = Field(..., description="Path to write parsed entries")
    max_workers: int = Field(default_factory=cpu_count, ge=1, description="Maximum number of live workers")
    language: str = Field(default=DEFAULT_LANGUAGE, description="Language of error messages")

    def _spawn_worker(self, line: str, line_number: int) -> Tuple[Process, Connection]:
        """
        Spawn an EntryWorker for the given line and return process and pipe.

        :param str line: Entry line
        :param int line_number: Line number of the entry in the input

        :return: Tuple of (Process, parent_pipe)
        :rtype: Tuple[Process, Connection]
        """
        parent_conn, child_conn = Pipe()
        worker = EntryWorker(
            conn=child_conn,
            line=line,
            line_number=line_number,
            language=self.language,
        )
        process = Process(target=worker.run)
        process.start()
        # The child owns its end now
        child_conn.close()
        return process, parent_conn

    @staticmethod
    def format_result(payload: dict) -> str:
        """
        Format a worker payload as one output line.

        :param dict payload: Payload received from a worker

        :return: ``"<line> = <name>: <price>"`` or ``"<line> -> ERROR[<kind>]: <message>"``
        :rtype: str
        """
        if "error" in payload:
            return f"{payload['line']} -> ERROR[{payload['kind']}]: {payload['error']}"
        return f"{payload['line']} = {payload['name']}: {payload['price']}"

    def _collect_finished_workers(
        self, active_workers: List[Tuple[Process, Connection]], f_out: IO[str]
    ) -> int:
        """
        Collect results from all finished workers and write them to the output file.

        Finished workers are removed from the active_workers list.

        :param list active_workers: List of tuples (Process, Pipe)
        :param file f_out: Open file handle for writing results

        :return: Number of collected entries that failed to parse
        :rtype: int
        """
        failures = 0
        # Iterate in reverse to safely remove finished workers while iterating
        for i in reversed(range(len(active_workers))):
            proc, pipe_conn = active_workers[i]
            if not proc.is_alive():
                # Receive payload from worker
                payload = pipe_conn.recv()
                pipe_conn.close()
                proc.join()
                active_workers.pop(i)

                if "error" in payload:
                    failures += 1

                # Write output immediately
                f_out.write(self.format_result(payload) + "\n")
                f_out.flush()
        return failures

    def run(self, lines: List[str]) -> int:
        """
        Parse every line and write the results to ``output_file``.

        Results are written in completion order, each line carrying its
        original text.

        :param List[str] lines: Non-empty entry lines

        :return: Number of lines that failed to parse
        :rtype: int
        """
        logger.info(f"🧮 Parsing {len(lines)} entries with up to {self.max_workers} workers")

        failures = 0
        active_workers: List[Tuple[Process, Connection]] = []

        with self.output_file.open("w", encoding="utf-8") as f_out:
            for line_number, line in enumerate(lines, start=1):
                # Wait until a worker slot is available
                while len(active_workers) >= self.max_workers:
                    wait([conn for _, conn in active_workers], timeout=0.1)
                    failures += self._collect_finished_workers(active_workers, f_out)

                # Spawn new worker for current line
                active_workers.append(self._spawn_worker(line, line_number))

            # Collect remaining active workers
            while active_workers:
                wait([conn for _, conn in active_workers], timeout=0.1)
                failures += self._collect_finished_workers(active_workers, f_out)

        logger.info(f"✅ Wrote {len(lines)} results to {self.output_file} ({failures} failed)")
        return failures
