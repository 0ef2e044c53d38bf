"""Worker process for parsing a single entry line."""
from multiprocessing.connection import Connection

from pydantic import BaseModel, ConfigDict, Field, field_validator

from price_entry.common.entry import parse_entry
from price_entry.common.errors import PriceEntryError
from price_entry.common.logger import logger
from price_entry.common.messages import DEFAULT_LANGUAGE, render_error
from price_entry.common.models import EntryResult


class EntryWorker(BaseModel):
    """
    Worker process responsible for parsing a single entry line.

    Lifecycle:
        - Spawned by the batch runner
        - Receives one line only
        - Sends the parsed entry or the error through a Pipe
        - Terminates immediately after computation
    """

    # One worker per line, never mutated after spawning
    # Allow arbitrary types like multiprocessing.Connection
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    conn: Connection = Field(..., description="Connection object for sending results back to the runner")
    line: str = Field(..., description="Single entry line to parse")
    line_number: int = Field(..., ge=1, description="Line number in the input file")
    language: str = Field(default=DEFAULT_LANGUAGE, description="Language of error messages sent back")

    @field_validator("line")
    def line_must_not_be_empty(cls, v: str) -> str:
        """Ensure that the line is not empty."""
        if not v.strip():
            raise ValueError("Entry line cannot be empty")
        return v

    def evaluate(self) -> EntryResult:
        """
        Parse the line into an EntryResult, capturing engine errors.

        :return: Successful or failed result for this line
        :rtype: EntryResult
        """
        try:
            entry = parse_entry(self.line)
        except PriceEntryError as exc:
            logger.error(f"👷❌ Worker failed on line {self.line_number}: {exc}")
            return EntryResult(
                line_number=self.line_number,
                line=self.line,
                error=render_error(exc, self.language),
                kind=exc.kind,
            )
        return EntryResult(
            line_number=self.line_number,
            line=self.line,
            name=entry.name,
            price=entry.price,
        )

    def run(self) -> None:
        """
        Parse the line and send the result payload through the pipe.

        :return: None
        """
        logger.info(f"👷🏁 Worker started on line {self.line_number}: {self.line}")
        try:
            result = self.evaluate()
            self.conn.send(result.model_dump(exclude_none=True))
        finally:
            # Always close the connection
            self.conn.close()

        if result.ok:
            logger.info(f"👷✅ Worker finished on line {self.line_number}: {result.name} = {result.price}")
