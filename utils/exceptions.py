from typing import List, Optional


class ExplorerError(Exception):
    """Base class for every error raised by the explorer engine."""


class RpcError(ExplorerError):
    """JSON-RPC or HTTP level failure reported by the node."""

    def __init__(self, method: str, message: str, code: Optional[int] = None):
        self.method = method
        self.code = code
        detail = f"code {code}: {message}" if code is not None else message
        super().__init__(f"RPC call {method} failed: {detail}")


class NotFoundError(ExplorerError):
    """The node returned null for a requested block or transaction."""


class DecodeError(ExplorerError):
    """A contract call returned bytes that do not match the expected layout."""


class RetryError(ExplorerError):
    """
    Raised once an operation failed for good.

    ``attempts`` keeps every attempt's message in order, each prefixed with
    its 1-based attempt index. The message lists them with consecutive
    identical failures folded into one line.
    """

    def __init__(self, operation: str, attempts: List[str], last_error: BaseException):
        self.operation = operation
        self.attempts = list(attempts)
        self.last_error = last_error
        if len(self.attempts) > 1:
            message = f"{operation} failed after {len(self.attempts)} attempts:\n" + "\n".join(
                _fold_attempts(self.attempts)
            )
        else:
            message = render_error(last_error)
        super().__init__(message)


def _fold_attempts(attempts: List[str]) -> List[str]:
    runs: List[List] = []
    for index, attempt in enumerate(attempts, start=1):
        text = attempt.split(": ", 1)[-1]
        if runs and runs[-1][2] == text:
            runs[-1][1] = index
        else:
            runs.append([index, index, text])
    return [
        f"Attempt {first}: {text}" if first == last else f"Attempts {first}-{last}: {text}"
        for first, last, text in runs
    ]


class NameResolutionError(ExplorerError):
    def __init__(self, name: str, step: str, reason: str):
        self.name = name
        self.step = step
        super().__init__(f"ENS resolution of '{name}' failed at {step}: {reason}")


class FetchError(ExplorerError):
    """Assembler level failure naming the operation and its target."""

    def __init__(self, operation: str, target: str):
        self.operation = operation
        self.target = target
        super().__init__(f"Failed to {operation} {target}")


def render_error(exc: BaseException) -> str:
    """Renders an exception together with its whole cause chain on one line."""
    parts = []
    current: Optional[BaseException] = exc
    while current is not None:
        text = str(current) or type(current).__name__
        # Wrapping errors often quote their cause already
        if not any(text in part for part in parts):
            parts.append(text)
        current = current.__cause__
    return ": ".join(parts)


def format_error_chain(exc: BaseException) -> str:
    """Renders the cause chain of an exception, outermost first, one link per line."""
    lines = []
    seen = []
    current: Optional[BaseException] = exc
    depth = 0
    while current is not None:
        text = str(current) or type(current).__name__
        if not any(text in previous for previous in seen):
            lines.append(text if depth == 0 else f"{'  ' * depth}caused by: {text}")
            seen.append(text)
            depth += 1
        current = current.__cause__
    return "\n".join(lines)
