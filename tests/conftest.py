"""Pytest configuration and fixtures."""

import pytest

from queryable import EntityGraph, Model, QueryableConfig, Relationship


@pytest.fixture(autouse=True)
def reset_registry():
    """Clear the current graph before and after each test.

    This ensures test isolation when using auto-registration.
    """
    from queryable.core.registry import set_current_graph

    set_current_graph(None)

    yield

    set_current_graph(None)


@pytest.fixture
def graph():
    """Blog graph: posts -> author (users) -> country (countries)."""
    countries = Model(name="countries", table="countries")
    users = Model(
        name="users",
        table="users",
        relationships=[Relationship(name="country", model="countries", foreign_key="country_id")],
    )
    posts = Model(
        name="posts",
        table="posts",
        relationships=[
            Relationship(name="author", model="users", foreign_key="user_id"),
            Relationship(name="comments", type="one_to_many", foreign_key="post_id"),
        ],
        queryable=QueryableConfig(
            columns=["posts.title", "users.name"],
            joins={
                "users": ("posts.user_id", "users.id"),
                "countries": ("users.country_id", "countries.id"),
            },
        ),
    )
    return EntityGraph([countries, users, posts])


@pytest.fixture
def posts(graph):
    return graph.get_model("posts")
