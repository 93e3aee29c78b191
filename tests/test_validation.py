"""Tests for model definition checks."""

from queryable import EntityGraph, Model, QueryableConfig, Relationship
from queryable.validation import validate_graph, validate_model


def test_unregistered_relationship_target(graph):
    # comments points at a model that isn't registered
    errors = validate_graph(graph)

    assert errors == ["Model 'posts': relationship 'comments' points to unknown model 'comments'"]


def test_searchable_column_from_unjoined_table():
    posts = Model(
        name="posts",
        table="blog.posts",
        queryable=QueryableConfig(columns=["posts.title", "blog.posts.body", "title", "users.name"]),
    )

    errors = validate_model(posts, EntityGraph([posts]))

    assert errors == [
        "Model 'posts': searchable column 'users.name' uses table 'users' which is neither the model's table nor joined"
    ]


def test_join_needs_both_columns():
    posts = Model(name="posts", table="posts", queryable=QueryableConfig(joins={"users": ("", "users.id")}))

    errors = validate_model(posts, EntityGraph([posts]))

    assert errors == ["Model 'posts': join to 'users' needs both a local and a foreign column"]


def test_relationships_resolving_in_graph():
    graph = EntityGraph(
        [
            Model(name="users", table="users"),
            Model(name="posts", table="posts", relationships=[Relationship(name="author", model="users")]),
        ]
    )

    assert validate_graph(graph) == []
