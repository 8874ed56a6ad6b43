"""
End-to-end lookups against YAML model files.
"""

import pytest

from modelretriever.core.exceptions import ModelProviderError, UnknownValidatorError
from modelretriever.events import CacheInvalidationListener, InvalidationEvent
from modelretriever.model import MergedValidationModel

from support import RegexValidator

pytestmark = pytest.mark.integration


def test_direct_lookup(retriever):
    model = retriever.get_model("app/components/article", "/content/news/2024/launch")

    assert model.validated_resource_type == "app/components/article"
    assert [p.name for p in model.resource_properties] == ["headline", "title"]


def test_lookup_outside_applicable_paths(retriever):
    assert retriever.get_model("app/components/article", "/content/blog/post") is None


def test_merged_lookup_across_hierarchy(retriever):
    model = retriever.get_model("app/components/article", "/content/news/launch", True)

    assert isinstance(model, MergedValidationModel)
    assert model.merged_resource_types == [
        "app/components/article", "app/components/page", "core/components/base"
    ]
    assert [p.name for p in model.resource_properties] == ["headline", "title", "created"]
    # the article's optional title wins over the page's required one
    assert model.get_resource_property("title").optional


def test_super_type_model_becomes_base_when_type_has_none(retriever):
    model = retriever.get_model("app/components/article", "/content/blog/post", True)

    assert model.validated_resource_type == "app/components/page"
    assert model.merged_resource_types == ["app/components/page", "core/components/base"]


def test_single_super_type_match_is_not_merged(retriever):
    model = retriever.get_model("app/components/page", "/apps/x", True)

    assert not isinstance(model, MergedValidationModel)
    assert model.validated_resource_type == "core/components/base"


def test_validator_removal_surfaces_as_provider_fault(retriever):
    retriever.remove_validator(RegexValidator())

    with pytest.raises(ModelProviderError) as excinfo:
        retriever.get_model("app/components/article", "/content/news/launch")

    assert isinstance(excinfo.value.__cause__, UnknownValidatorError)
    assert not retriever.is_cached("app/components/article")

    retriever.add_validator(RegexValidator())
    assert retriever.get_model("app/components/article", "/content/news/launch") is not None


def test_file_change_picked_up_after_invalidation_event(retriever, model_directory):
    assert retriever.get_model("app/components/page", "/apps/x") is None

    (model_directory / "apps.yaml").write_text(
        "models:\n"
        "  - validated_resource_type: app/components/page\n"
        "    applicable_paths: ['/apps']\n"
    )
    # cached until invalidated
    assert retriever.get_model("app/components/page", "/apps/x") is None

    listener = CacheInvalidationListener(retriever)
    listener.events_queue.put(InvalidationEvent(properties={"path": str(model_directory)}))
    assert listener.process_pending() == 1

    model = retriever.get_model("app/components/page", "/apps/x")
    assert model.applicable_paths == ("/apps",)
