from .models import StepResult


class EnvironmentState:
    """
    Outcome of the preflight probes for one run.

    Filled in by the verifier, read once by the CLI before anything else runs.
    """

    def __init__(self) -> None:
        self.results: list[StepResult] = []

    # ------------- public API -------------

    def record(self, result: StepResult) -> StepResult:
        self.results.append(result)
        return result

    @property
    def ok(self) -> bool:
        return all(r.ok for r in self.results)

    @property
    def failure(self) -> StepResult | None:
        """First probe that did not pass, if any."""
        return next((r for r in self.results if not r.ok), None)
