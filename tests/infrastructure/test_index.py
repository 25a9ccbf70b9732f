"""Tests for the SourceIndex."""

import threading

import pytest

from codetally.exceptions import InvariantViolation, ParseError
from codetally.infrastructure import EntityId, EntityType, Metric, SourceIndex


@pytest.fixture
def index():
    return SourceIndex("Test Project")


class TestProject:
    def test_project_exists_from_the_start(self, index):
        projects = index.search(EntityType.PROJECT)
        assert len(projects) == 1
        assert projects[0].key == "Test Project"
        assert projects[0].parent is None

    def test_empty_index_has_no_files(self, index):
        assert index.files() == []
        assert index.project.measures == {}


class TestCommit:
    def test_commit_creates_file_under_project(self, index):
        entity = index.commit("/a.m", {Metric.LINES: 3}, {"language": "objc"})
        assert entity.type is EntityType.FILE
        assert entity.parent == index.project.id
        assert entity.metadata == {"language": "objc"}
        assert index.get(EntityId(EntityType.FILE, "/a.m")) is entity

    def test_files_metric_and_totals(self, index):
        index.commit("/a.m", {Metric.LINES: 3, Metric.COMMENT_LINES: 1})
        index.commit("/b.m", {Metric.LINES: 4})
        assert index.project.measures == {
            Metric.FILES: 2,
            Metric.LINES: 7,
            Metric.COMMENT_LINES: 1,
        }

    def test_untouched_metric_is_absent(self, index):
        entity = index.commit("/a.m", {Metric.LINES: 3})
        assert Metric.LINES_OF_CODE not in entity.measures
        assert entity.get(Metric.LINES_OF_CODE) is None

    def test_recommit_replaces(self, index):
        index.commit("/a.m", {Metric.LINES: 3})
        replaced = index.commit("/a.m", {Metric.LINES: 5})
        assert index.files() == [replaced]
        assert index.project.measures[Metric.FILES] == 1
        assert index.project.measures[Metric.LINES] == 5

    def test_negative_value_rejected(self, index):
        with pytest.raises(InvariantViolation):
            index.commit("/a.m", {Metric.LINES: -1})
        assert index.files() == []

    def test_project_metric_rejected_at_file_level(self, index):
        with pytest.raises(InvariantViolation):
            index.commit("/a.m", {Metric.FILES: 1})

    def test_concurrent_commits(self, index):
        def commit(i):
            index.commit(f"/f{i}.m", {Metric.LINES: 1})

        threads = [threading.Thread(target=commit, args=(i,)) for i in range(50)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(index.files()) == 50
        assert index.project.measures[Metric.FILES] == 50
        assert index.project.measures[Metric.LINES] == 50


class TestFailures:
    def test_record_failure(self, index):
        error = ParseError("/bad.m", "objc", "unterminated block comment")
        failure = index.record_failure("/bad.m", error.reason, error)
        assert index.failures == [failure]
        assert failure.error is error
        assert index.files() == []

    def test_later_success_clears_failure(self, index):
        error = ParseError("/a.m", "objc", "boom")
        index.record_failure("/a.m", "boom", error)
        index.commit("/a.m", {Metric.LINES: 1})
        assert index.failures == []

    def test_failure_after_success_withdraws_entity(self, index):
        index.commit("/a.m", {Metric.LINES: 3})
        index.commit("/b.m", {Metric.LINES: 4})
        error = ParseError("/a.m", "objc", "unterminated string literal at line 1")
        index.record_failure("/a.m", error.reason, error)

        assert [e.key for e in index.files()] == ["/b.m"]
        assert [f.path for f in index.failures] == ["/a.m"]
        assert index.project.measures[Metric.FILES] == 1
        assert index.project.measures[Metric.LINES] == 4

    def test_repeated_failure_recorded_once(self, index):
        error = ParseError("/a.m", "objc", "boom")
        index.record_failure("/a.m", "boom", error)
        index.record_failure("/a.m", "boom", error)
        assert len(index.failures) == 1
