"""
Shared pytest configuration and fixtures for the model retriever tests.
"""

import textwrap

import pytest

from modelretriever.hierarchy import MappingTypeHierarchy
from modelretriever.providers import YamlModelProvider
from modelretriever.retriever import ModelRetriever

from support import RegexValidator, NotEmptyValidator


@pytest.fixture
def hierarchy():
    """Three level resource type hierarchy."""
    return MappingTypeHierarchy({
        "app/components/article": "app/components/page",
        "app/components/page": "core/components/base"
    })


@pytest.fixture
def model_directory(tmp_path):
    """Directory with YAML model definitions for the whole hierarchy."""
    (tmp_path / "page.yaml").write_text(textwrap.dedent("""
        models:
          - validated_resource_type: app/components/page
            applicable_paths: ["/content"]
            properties:
              - name: title
                validators:
                  - id: support.NotEmptyValidator
          - validated_resource_type: core/components/base
            applicable_paths: ["/"]
            properties:
              - name: created
    """))
    (tmp_path / "article.yml").write_text(textwrap.dedent("""
        models:
          - validated_resource_type: app/components/article
            applicable_paths: ["/content/news"]
            properties:
              - name: headline
                validators:
                  - id: support.RegexValidator
                    arguments: {regex: "^[A-Z]"}
              - name: title
                optional: true
    """))
    return tmp_path


@pytest.fixture
def retriever(hierarchy, model_directory):
    """Retriever wired to a YAML provider and the validators it needs."""
    retriever = ModelRetriever(hierarchy=hierarchy)
    retriever.add_validator(RegexValidator())
    retriever.add_validator(NotEmptyValidator())
    retriever.add_model_provider(YamlModelProvider(str(model_directory)))
    return retriever
