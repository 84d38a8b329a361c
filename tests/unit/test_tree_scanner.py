"""Unit tests for application discovery in the Sway tree."""

from sway_workspace_labels.tree_scanner import find_applications, iter_workspaces

from tests.fixtures.sway_tree import floating, snapshot, split, tree, view, workspace


def _names(nodes):
    return [n.app_id or n.window_properties.window_class for n in nodes]


def test_empty_workspace():
    assert find_applications(snapshot(workspace("1"))) == []


def test_depth_first_preorder():
    ws = snapshot(workspace("1", nodes=[
        split(view(app_id="a"), split(view(app_id="b"), view(app_id="c"))),
        view(app_id="d"),
    ]))
    assert _names(find_applications(ws)) == ["a", "b", "c", "d"]


def test_container_with_pid_is_kept_with_children():
    outer = view(app_id="outer")
    outer["nodes"] = [view(app_id="inner")]
    ws = snapshot(workspace("1", nodes=[outer]))
    assert _names(find_applications(ws)) == ["outer", "inner"]


def test_nodes_without_pid_are_skipped():
    ws = snapshot(workspace("1", nodes=[view(pid=None, app_id="ghost"), view(app_id="real")]))
    assert _names(find_applications(ws)) == ["real"]


def test_floating_group_contributes_one_node():
    ws = snapshot(workspace("1", floating_nodes=[
        floating(view(window_class="Gimp"), view(window_class="Gimp"), view(window_class="Gimp")),
    ]))
    assert _names(find_applications(ws)) == ["Gimp"]


def test_each_floating_subtree_summarized_separately():
    ws = snapshot(workspace("1", nodes=[view(app_id="firefox")], floating_nodes=[
        view(window_class="Slack"),
        floating(view(app_id="pavucontrol"), view(app_id="blueman")),
    ]))
    assert _names(find_applications(ws)) == ["firefox", "Slack", "pavucontrol"]


def test_floating_subtree_without_process_contributes_nothing():
    ws = snapshot(workspace("1", floating_nodes=[floating(view(pid=None, app_id="x"))]))
    assert find_applications(ws) == []


def test_returns_fresh_list_each_call():
    ws = snapshot(workspace("1", nodes=[view(app_id="a")]))
    first = find_applications(ws)
    first.clear()
    assert len(find_applications(ws)) == 1


def test_iter_workspaces_in_tree_order():
    root = snapshot(tree(workspace("1"), workspace("2 code"), workspace("scratch")))
    assert [ws.name for ws in iter_workspaces(root)] == ["__i3_scratch", "1", "2 code", "scratch"]


def test_iter_workspaces_ignores_other_output_children():
    data = tree(workspace("1"))
    data["nodes"][1]["nodes"].append(split(view(app_id="stray")))
    assert [ws.name for ws in iter_workspaces(snapshot(data))] == ["__i3_scratch", "1"]
