"""Explorer tree and lost+found visibility tests."""

from restree.tree import (
    ExplorerNode,
    Resource,
    build_explorer_tree,
    flatten_paths,
    is_lost_and_found_visible,
)


def test_flatten_paths_depth_first() -> None:
    tree = [
        ExplorerNode(
            name="src",
            path="src",
            is_directory=True,
            children=[
                ExplorerNode(name="index.ts", path="src/index.ts", is_directory=False),
                ExplorerNode(
                    name="components",
                    path="src/components",
                    is_directory=True,
                    children=[
                        ExplorerNode(
                            name="Tree.tsx",
                            path="src/components/Tree.tsx",
                            is_directory=False,
                        )
                    ],
                ),
            ],
        )
    ]

    assert flatten_paths(tree) == [
        "src",
        "src/index.ts",
        "src/components",
        "src/components/Tree.tsx",
    ]


def test_build_explorer_tree_nests_by_parent_path() -> None:
    resources = [
        {"name": "a.md", "path": "my-files/docs/a.md", "type": "file"},
        {"name": "my-files", "path": "my-files", "type": "folder"},
        {"name": "docs", "path": "my-files/docs", "type": "folder"},
        {"name": "notes.txt", "path": "my-files/notes.txt", "type": "file"},
        {"name": "stray.txt", "path": "elsewhere/stray.txt", "type": "file"},
    ]

    roots = build_explorer_tree(resources)

    assert [node.path for node in roots] == ["my-files", "elsewhere/stray.txt"]
    assert flatten_paths(roots) == [
        "my-files",
        "my-files/docs",
        "my-files/docs/a.md",
        "my-files/notes.txt",
        "elsewhere/stray.txt",
    ]


def test_files_never_receive_children() -> None:
    resources = [
        {"name": "a", "path": "a", "type": "file"},
        {"name": "b", "path": "a/b", "type": "file"},
    ]

    roots = build_explorer_tree(resources)

    assert [node.path for node in roots] == ["a", "a/b"]
    assert roots[0].children == []


def test_lost_and_found_hidden_only_when_empty_folder() -> None:
    empty = Resource(name="lost+found", path="disk/lost+found", type="folder", empty=True)
    full = Resource(name="lost+found", path="disk/lost+found", type="folder", empty=False)
    unknown = Resource(name="lost+found", path="disk/lost+found", type="folder")
    as_file = {"name": "lost+found", "path": "disk/lost+found", "type": "file", "empty": True}
    other = Resource(name="docs", path="disk/docs", type="folder", empty=True)

    assert is_lost_and_found_visible(empty) is False
    assert is_lost_and_found_visible(full) is True
    assert is_lost_and_found_visible(unknown) is True
    assert is_lost_and_found_visible(as_file) is True
    assert is_lost_and_found_visible(other) is True


def test_lost_and_found_custom_name() -> None:
    orphanage = Resource(name="orphans", path="orphans", type="folder", empty=True)

    assert is_lost_and_found_visible(orphanage, name="orphans") is False
