from __future__ import annotations

from pathlib import Path

from cache_cleaner.host import Host, Severity
from cache_cleaner.remover import CleanupFailure, CleanupOutcome
from cache_cleaner.workflow import NOTHING_TO_CLEAN_MESSAGE, STARTED_MESSAGE, CleanupWorkflow


class FakeHost(Host):
    def __init__(self, answers: list[bool] | None = None):
        self.answers = list(answers or [])
        self.questions: list[str] = []
        self.notifications: list[tuple[str, Severity]] = []
        self.restarts = 0

    def confirm(self, message: str) -> bool:
        self.questions.append(message)
        return self.answers.pop(0) if self.answers else False

    def notify(self, message: str, severity: Severity) -> None:
        self.notifications.append((message, severity))

    def restart(self) -> bool:
        self.restarts += 1
        return True


class InlineRunner:
    def __init__(self):
        self.is_running = True
        self.scheduled: list[tuple[float, object]] = []

    def submit(self, func, *args) -> None:
        func(*args)

    def schedule_in(self, seconds: float, func, *args) -> None:
        self.scheduled.append((seconds, func))


class DeferredRunner(InlineRunner):
    def __init__(self):
        super().__init__()
        self.pending: list = []

    def submit(self, func, *args) -> None:
        self.pending.append((func, args))


class _StaticRemover:
    def __init__(self, outcome: CleanupOutcome):
        self.outcome = outcome
        self.requests: list[tuple[str, ...]] = []

    def remove_all(self, paths) -> CleanupOutcome:
        self.requests.append(tuple(paths))
        return self.outcome


def _workflow(host: FakeHost, runner, paths: list[str], remover=None, delay: float = 3.0) -> CleanupWorkflow:
    return CleanupWorkflow(host=host, runner=runner, target_paths=paths, remover=remover, restart_delay_seconds=delay)


def test_declined_confirmation_deletes_nothing(tmp_path: Path) -> None:
    target = tmp_path / "Intermediate"
    target.mkdir()
    host = FakeHost(answers=[False])

    started = _workflow(host, InlineRunner(), [str(target)]).request_cleanup()

    assert started is False
    assert target.exists() is True
    assert host.notifications == []
    assert str(target) in host.questions[0]


def test_successful_cleanup_schedules_restart(tmp_path: Path) -> None:
    intermediate = tmp_path / "Intermediate"
    saved = tmp_path / "Saved"
    intermediate.mkdir()
    saved.mkdir()
    host = FakeHost(answers=[True])
    runner = InlineRunner()
    workflow = _workflow(host, runner, [str(intermediate), str(saved), str(tmp_path / ".vs")])

    assert workflow.request_cleanup() is True

    assert [severity for _, severity in host.notifications] == [Severity.PENDING, Severity.SUCCESS]
    assert host.notifications[0][0] == STARTED_MESSAGE
    assert "Successfully cleaned up 2 folders" in host.notifications[1][0]
    assert "Restarting in 3 seconds" in host.notifications[1][0]
    assert len(runner.scheduled) == 1
    delay, restart = runner.scheduled[0]
    assert delay == 3.0
    assert host.restarts == 0
    restart()
    assert host.restarts == 1
    assert workflow.last_outcome is not None
    assert workflow.last_outcome.deleted_count == 2
    assert workflow.is_running is False


def test_nothing_to_clean_does_not_restart(tmp_path: Path) -> None:
    host = FakeHost(answers=[True])
    runner = InlineRunner()

    _workflow(host, runner, [str(tmp_path / "Binaries")]).request_cleanup()

    assert host.notifications[-1] == (NOTHING_TO_CLEAN_MESSAGE, Severity.NONE)
    assert runner.scheduled == []
    assert host.restarts == 0


def test_failures_ask_before_restarting() -> None:
    outcome = CleanupOutcome(
        deleted=["/proj/Intermediate"],
        failures=[CleanupFailure(path="/proj/Saved", reason="all strategies exhausted")],
    )
    host = FakeHost(answers=[True, True])
    runner = InlineRunner()

    _workflow(host, runner, ["/proj/Intermediate", "/proj/Saved"], remover=_StaticRemover(outcome)).request_cleanup()

    message, severity = host.notifications[-1]
    assert severity is Severity.FAIL
    assert "Failed to delete: /proj/Saved" in message
    assert len(host.questions) == 2
    assert host.restarts == 1
    assert runner.scheduled == []


def test_failures_without_restart_consent() -> None:
    outcome = CleanupOutcome(failures=[CleanupFailure(path="/proj/Saved", reason="all strategies exhausted")])
    host = FakeHost(answers=[True, False])

    _workflow(host, InlineRunner(), ["/proj/Saved"], remover=_StaticRemover(outcome)).request_cleanup()

    assert host.notifications[-1][1] is Severity.FAIL
    assert host.restarts == 0


def test_second_start_is_refused_while_running() -> None:
    remover = _StaticRemover(CleanupOutcome())
    runner = DeferredRunner()
    workflow = _workflow(FakeHost(), runner, ["/proj/Intermediate"], remover=remover)

    assert workflow.start_cleanup() is True
    assert workflow.is_running is True
    assert workflow.start_cleanup() is False
    assert len(runner.pending) == 1

    func, args = runner.pending.pop()
    func(*args)

    assert workflow.is_running is False
    assert remover.requests == [("/proj/Intermediate",)]
    assert workflow.start_cleanup() is True


def test_completion_errors_do_not_leave_workflow_running() -> None:
    class _ExplodingHost(FakeHost):
        def notify(self, message: str, severity: Severity) -> None:
            if severity is Severity.NONE:
                raise RuntimeError("notification system down")
            super().notify(message, severity)

    workflow = _workflow(_ExplodingHost(), InlineRunner(), ["/proj/Intermediate"], remover=_StaticRemover(CleanupOutcome()))

    assert workflow.start_cleanup() is True
    assert workflow.is_running is False
    assert workflow.last_outcome is not None


def test_confirmation_message_lists_targets() -> None:
    workflow = _workflow(FakeHost(), InlineRunner(), ["/proj/Intermediate", "/proj/.vs"])

    message = workflow.confirmation_message()

    assert "/proj/Intermediate" in message
    assert "/proj/.vs" in message
    assert "restart" in message


def test_restart_disabled_reports_without_scheduling(tmp_path: Path) -> None:
    target = tmp_path / "Intermediate"
    target.mkdir()
    host = FakeHost(answers=[True])
    runner = InlineRunner()
    workflow = CleanupWorkflow(host=host, runner=runner, target_paths=[str(target)], restart_enabled=False)

    workflow.request_cleanup()

    assert host.notifications[-1] == ("Successfully cleaned up 1 folders.", Severity.SUCCESS)
    assert runner.scheduled == []
    assert host.restarts == 0


def test_restart_disabled_never_asks_after_failures() -> None:
    outcome = CleanupOutcome(failures=[CleanupFailure(path="/proj/Saved", reason="all strategies exhausted")])
    host = FakeHost(answers=[True, True])
    workflow = CleanupWorkflow(
        host=host,
        runner=InlineRunner(),
        target_paths=["/proj/Saved"],
        remover=_StaticRemover(outcome),
        restart_enabled=False,
    )

    workflow.request_cleanup()

    assert len(host.questions) == 1
    assert host.restarts == 0
