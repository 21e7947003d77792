"""
Unit Tests for Note relationship loading.
"""

import pytest

from modules.notebook.models.note import Note


@pytest.mark.parametrize("relationship_name", ["tags", "summaries"])
def test_collections_raise_on_lazy_load(relationship_name: str):
    prop = getattr(Note, relationship_name).property

    assert prop.lazy == "raise"
    assert prop.passive_deletes is True
