"""Association Replacer: atomic tag/category link replacement.

Tests cover:
    - Reload yields exactly the new set, whatever the previous set was
    - Empty set clears; duplicate targets collapse
    - Tag and category dimensions are independent
    - Unknown targets and tombstoned content fail without touching existing links
    - Direct AssociationReplacer use with AssociationKind
"""

import pytest

from cms_core.core.domain_types import AssociationKind
from cms_core.core.errors import ResourceNotFoundError
from cms_core.core.records import Article, Category, Tag
from cms_core.repositories.associations import AssociationReplacer
from cms_core.repositories.kinds import ARTICLE


@pytest.fixture
async def tag_set(tags):
    return [await tags.create(Tag(title=t)) for t in ("Go", "Python", "Rust")]


@pytest.fixture
async def tagged_article(articles, tag_set):
    return await articles.create(Article(
        title="Learning Go", slug="learning-go", tags=tag_set[:2],
    ))


def _titles(items) -> list[str]:
    return sorted(i.title for i in items)


async def test_replace_tags_yields_exactly_new_set(articles, tagged_article, tag_set):
    await articles.replace_tags(tagged_article, [tag_set[2]])
    reloaded = await articles.get_by_id(tagged_article.id)
    assert _titles(reloaded.tags) == ["Rust"]


async def test_replace_tags_with_overlapping_set(articles, tagged_article, tag_set):
    await articles.replace_tags(tagged_article, tag_set[1:])
    reloaded = await articles.get_by_id(tagged_article.id)
    assert _titles(reloaded.tags) == ["Python", "Rust"]


async def test_replace_tags_with_empty_set_clears(articles, tagged_article):
    await articles.replace_tags(tagged_article, [])
    reloaded = await articles.get_by_id(tagged_article.id)
    assert reloaded.tags == []


async def test_replace_tags_on_untagged_article(articles, make_article, tag_set):
    article = await make_article("Plain")
    await articles.replace_tags(article, tag_set)
    reloaded = await articles.get_by_id(article.id)
    assert _titles(reloaded.tags) == ["Go", "Python", "Rust"]


async def test_duplicate_targets_collapse(articles, tagged_article, tag_set):
    await articles.replace_tags(tagged_article, [tag_set[0], tag_set[0]])
    reloaded = await articles.get_by_id(tagged_article.id)
    assert _titles(reloaded.tags) == ["Go"]


async def test_replace_categories_leaves_tags_alone(
    articles, categories, tagged_article,
):
    devops = await categories.create(Category(title="DevOps"))
    await articles.replace_categories(tagged_article, [devops])

    reloaded = await articles.get_by_id(tagged_article.id)
    assert _titles(reloaded.categories) == ["DevOps"]
    assert _titles(reloaded.tags) == ["Go", "Python"]


async def test_unknown_tag_rolls_back_whole_replace(articles, tagged_article, tag_set):
    with pytest.raises(ResourceNotFoundError) as exc:
        await articles.replace_tags(
            tagged_article, [tag_set[2], Tag(title="Ghost", id=999)],
        )
    assert exc.value.resource_type == "Tag"
    assert exc.value.resource_id == "999"

    reloaded = await articles.get_by_id(tagged_article.id)
    assert _titles(reloaded.tags) == ["Go", "Python"]


async def test_replace_on_deleted_article_is_not_found(articles, tagged_article, tag_set):
    await articles.delete(tagged_article.id)
    with pytest.raises(ResourceNotFoundError) as exc:
        await articles.replace_tags(tagged_article, [tag_set[2]])
    assert exc.value.resource_type == "Article"

    tombstoned = await articles.get_by_id_including_deleted(tagged_article.id)
    assert _titles(tombstoned.tags) == ["Go", "Python"]


async def test_replace_requires_saved_article(articles, tag_set):
    with pytest.raises(ValueError):
        await articles.replace_tags(Article(title="Unsaved", slug="unsaved"), tag_set)


async def test_replacer_accepts_raw_ids(store, articles, tagged_article, tag_set):
    replacer = AssociationReplacer(store, ARTICLE)
    await replacer.replace(tagged_article.id, AssociationKind.TAG, iter([tag_set[2].id]))

    reloaded = await articles.get_by_id(tagged_article.id)
    assert _titles(reloaded.tags) == ["Rust"]


async def test_replacer_missing_content_id(store, tag_set):
    replacer = AssociationReplacer(store, ARTICLE)
    with pytest.raises(ResourceNotFoundError):
        await replacer.replace(4242, AssociationKind.TAG, [tag_set[0].id])
