import sys
from dataclasses import dataclass
from pathlib import Path

from ..exceptions.domain_exceptions import UnsupportedServerScriptError


# Fixed extension -> interpreter table; no PATH discovery.
INTERPRETERS: dict[str, str] = {
    ".py": sys.executable,
    ".js": "node",
}


@dataclass(frozen=True)
class ServerScript:
    """Immutable value object for a tool server script and its interpreter."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or self.value.strip() == "":
            raise UnsupportedServerScriptError("Server script path cannot be empty")

        if self.extension not in INTERPRETERS:
            supported = ", ".join(sorted(INTERPRETERS))
            raise UnsupportedServerScriptError(
                f"Server script must end with one of {supported}: {self.value}"
            )

    @property
    def extension(self) -> str:
        """Get the lower-cased file extension."""
        return Path(self.value).suffix.lower()

    @property
    def command(self) -> str:
        """Interpreter used to launch the script."""
        return INTERPRETERS[self.extension]

    @property
    def args(self) -> list[str]:
        return [self.value]

    def __str__(self) -> str:
        return self.value
