"""
Watch loop tests

Tests the rebuild gate (at most one build in flight, changes during a build
dropped), recovery after a failed build, event filtering, and a live run
against a polling observer.
"""

import asyncio

import pytest
from watchdog.events import (
    DirModifiedEvent,
    FileCreatedEvent,
    FileModifiedEvent,
    FileMovedEvent,
)
from watchdog.observers.polling import PollingObserver

from inkpage.lib.errors import InkpageError, MissingSourcesError
from inkpage.lib.watcher import ChangeHandler, Watcher


class FakeBuild:
    """Build stand-in that takes a little while and counts its calls"""

    def __init__(self, fail: bool = False, delay: float = 0.05):
        self.calls = 0
        self.fail = fail
        self.delay = delay

    async def __call__(self):
        self.calls += 1
        await asyncio.sleep(self.delay)
        if self.fail:
            raise InkpageError("broken story")


class TestRebuildGate:
    """Test that overlapping change events collapse into one rebuild"""

    def test_back_to_back_changes_trigger_one_build(self, project, settings):
        fake = FakeBuild()
        watcher = Watcher(cwd=project, settings=settings, build=fake)

        async def scenario():
            first = watcher.change_handle("style.scss")
            second = watcher.change_handle("script.js")
            assert first is not None
            assert second is None
            assert watcher.rebuilding is True

            assert await first is True
            assert watcher.rebuilding is False
            assert fake.calls == 1

            third = watcher.change_handle("style.scss")
            assert third is not None
            await third

        asyncio.run(scenario())
        assert fake.calls == 2

    def test_changes_during_build_are_dropped_not_queued(self, project, settings):
        fake = FakeBuild()
        watcher = Watcher(cwd=project, settings=settings, build=fake)

        async def scenario():
            task = watcher.change_handle()
            await asyncio.sleep(0.01)
            for _ in range(5):
                assert watcher.change_handle() is None
            await task
            await asyncio.sleep(0.1)

        asyncio.run(scenario())
        assert fake.calls == 1

    def test_failed_build_clears_the_gate(self, project, settings):
        fake = FakeBuild(fail=True)
        watcher = Watcher(cwd=project, settings=settings, build=fake)

        async def scenario():
            assert await watcher.change_handle() is False
            assert watcher.rebuilding is False
            assert await watcher.change_handle() is False

        asyncio.run(scenario())
        assert fake.calls == 2

    def test_settle_delay_holds_the_gate(self, project, settings):
        settings = settings.model_copy(update={"watch_debounce_ms": 50})
        fake = FakeBuild(delay=0)
        watcher = Watcher(cwd=project, settings=settings, build=fake)

        async def scenario():
            task = watcher.change_handle()
            await asyncio.sleep(0.01)
            assert fake.calls == 0
            assert watcher.change_handle() is None
            await task

        asyncio.run(scenario())
        assert fake.calls == 1


class TestChangeHandler:
    """Test filtering of filesystem events down to the required sources"""

    @pytest.fixture
    def seen(self):
        return []

    @pytest.fixture
    def handler(self, project, seen):
        paths = [project / "sources" / "style.scss", project / "sources" / "story.ink.json"]
        return ChangeHandler(paths, seen.append)

    def test_modified_watched_file(self, handler, seen, project):
        handler.dispatch(FileModifiedEvent(str(project / "sources" / "style.scss")))
        assert len(seen) == 1
        assert seen[0].endswith("style.scss")

    def test_created_watched_file(self, handler, seen, project):
        handler.dispatch(FileCreatedEvent(str(project / "sources" / "story.ink.json")))
        assert len(seen) == 1

    def test_rename_onto_watched_file(self, handler, seen, project):
        sources = project / "sources"
        handler.dispatch(FileMovedEvent(str(sources / ".style.scss.swp"), str(sources / "style.scss")))
        assert len(seen) == 1

    def test_unrelated_file_is_ignored(self, handler, seen, project):
        handler.dispatch(FileModifiedEvent(str(project / "sources" / "notes.txt")))
        assert seen == []

    def test_directory_event_is_ignored(self, handler, seen, project):
        handler.dispatch(DirModifiedEvent(str(project / "sources")))
        assert seen == []


class TestRun:
    """Test the observer-driven loop"""

    def test_missing_sources_directory(self, tmp_path, settings):
        watcher = Watcher(cwd=tmp_path / "empty", settings=settings, build=FakeBuild())

        with pytest.raises(MissingSourcesError):
            asyncio.run(watcher.run())

    def test_rebuilds_when_a_source_changes(self, project, settings):
        fake = FakeBuild(delay=0)
        watcher = Watcher(
            cwd=project,
            settings=settings,
            build=fake,
            observer_factory=lambda: PollingObserver(timeout=0.1),
        )

        async def scenario():
            runner = asyncio.ensure_future(watcher.run())
            await asyncio.sleep(0.5)
            (project / "sources" / "script.js").write_text(
                "console.log('a longer script than before');\n", encoding="utf-8"
            )
            for _ in range(50):
                if fake.calls:
                    break
                await asyncio.sleep(0.1)
            watcher.stop()
            await runner

        asyncio.run(scenario())
        assert fake.calls >= 1

    def test_stop_before_run_is_honoured(self, project, settings):
        watcher = Watcher(
            cwd=project,
            settings=settings,
            build=FakeBuild(),
            observer_factory=lambda: PollingObserver(timeout=0.1),
        )
        watcher.stop()

        async def scenario():
            await asyncio.wait_for(watcher.run(), timeout=5)

        asyncio.run(scenario())
