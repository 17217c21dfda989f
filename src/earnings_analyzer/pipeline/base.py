"""Base protocol for pipeline handlers."""

from typing import Protocol, TypeVar

from earnings_analyzer.core.types import Result
from earnings_analyzer.exceptions import TranscriptAnalyzerError

# Contravariant input (handlers can accept supertypes), invariant output
T_In = TypeVar("T_In", contravariant=True)
T_Out = TypeVar("T_Out")
T_Error = TypeVar("T_Error", bound=TranscriptAnalyzerError)


class BaseAsyncHandler(Protocol[T_In, T_Out, T_Error]):
    """Protocol for asynchronous pipeline handlers.

    Each handler performs a single transformation of the request state,
    making it easy to test and reason about.
    """

    async def handle(self, command: T_In) -> Result[T_Out, T_Error]:
        """Process one stage of a request.

        Args:
            command: The input state from the previous pipeline stage.

        Returns:
            A Result object containing either the next state or an error.
        """
        ...
