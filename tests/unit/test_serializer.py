"""Test commit payload rendering: structured, flattened and params forms."""

from scorm_runtime.cmi.resolver import PathResolver
from scorm_runtime.commit.serializer import flatten, render_payload, render_tree, to_params
from scorm_runtime.core.enums import CommitFormat, ResolveMode


class TestRenderTree:
    def test_root_wraps_tree(self, tree):
        rendered = render_tree(tree)
        assert list(rendered) == ["cmi"]
        assert rendered["cmi"]["core"]["lesson_status"] == "not attempted"

    def test_schema_order(self, tree):
        assert list(render_tree(tree)["cmi"])[:3] == ["suspend_data", "launch_data", "comments"]

    def test_keywords_not_rendered(self, tree):
        core = render_tree(tree)["cmi"]["core"]
        assert "_children" not in core
        assert "_version" not in render_tree(tree)["cmi"]

    def test_write_only_leaves_rendered(self, tree):
        assert render_tree(tree)["cmi"]["core"]["session_time"] == "00:00:00"

    def test_collections_keyed_by_index(self, resolver, tree):
        resolver.resolve("cmi.objectives.0.id", ResolveMode.SET, "obj-0")
        objectives = render_tree(tree)["cmi"]["objectives"]
        assert list(objectives) == ["0"]
        assert objectives["0"]["id"] == "obj-0"
        assert objectives["0"]["score"] == {"raw": "", "min": "", "max": ""}


class TestFlatten:
    def test_dotted_keys(self):
        assert flatten({"a": {"b": "1", "c": {"d": "2"}}}) == {"a.b": "1", "a.c.d": "2"}

    def test_empty_container_kept(self):
        assert flatten({"a": {}, "b": "x"}) == {"a": {}, "b": "x"}

    def test_params_tokens(self):
        assert to_params({"a.b": "1", "c": {}}) == ["a.b=1", "c="]


class TestRenderPayload:
    def test_structured(self, tree):
        assert render_payload(tree, CommitFormat.STRUCTURED) == render_tree(tree)

    def test_flattened(self, tree):
        flat = render_payload(tree, CommitFormat.FLATTENED)
        assert flat["cmi.core.lesson_status"] == "not attempted"
        assert flat["cmi.objectives"] == {}

    def test_params(self, tree, error_channel):
        resolver = PathResolver(tree, error_channel)
        resolver.resolve("cmi.core.score.raw", ResolveMode.SET, "75")
        params = render_payload(tree, CommitFormat.PARAMS)
        assert "cmi.core.score.raw=75" in params
        assert "cmi.interactions=" in params
