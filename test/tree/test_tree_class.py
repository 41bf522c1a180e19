from timetrees.tree import Node, TimeTree
from timetrees.parser.newick_parser import parse_newick


def create_star_tree(root_age, leaf_labels):
    r"""
    Create a star-like tree:
        Root
       / | \
      L1 L2 L3 ...
    """
    root = Node(age=root_age)
    for label in leaf_labels:
        root.add_child(Node(label=label))
    return root


def create_balanced_tree():
    r"""
    Create a balanced binary tree:
           R (2)
          /   \
       B (1)  C (1)
       / \    / \
      D   E  F   G
    """
    B = Node(age=1.0, children=[Node(label="D"), Node(label="E")])
    C = Node(age=1.0, children=[Node(label="F"), Node(label="G")])
    return Node(age=2.0, children=[B, C])


# 1. Empty node
def test_new_node_is_empty_root_leaf():
    node = Node()
    assert node.is_root()
    assert node.is_leaf()
    assert not node.is_internal()
    assert node.age == 0.0
    assert node.label == ""
    assert node.annotation == {}
    assert node.number == -1
    assert node.edge_length() == 0.0


# 2. add_child
def test_add_child():
    root = Node(age=1.0)
    child = Node(label="Child")
    root.add_child(child)
    assert child in root.children, "Child should be appended to root children"
    assert child.parent is root
    assert not child.is_root()
    assert root.is_internal()
    assert child.edge_length() == 1.0
    assert child.get_root() is root


# 3. Basic methods on a parsed tree
def test_basic_methods():
    t = parse_newick("((A:1,B:1):1,C:2):0;")
    r = t.root
    leaf = t.get_leaves()[0]

    assert r.is_root()
    assert not leaf.is_root()
    assert not r.is_leaf()
    assert leaf.is_leaf()
    assert leaf.label == "A"


# 4. Descendant counts
def test_descendant_count():
    t = parse_newick("((A:1,B:1):1,C:2):0;")
    assert t.root.get_descendant_count() == 5
    for node in t.get_nodes():
        assert node.get_descendant_count() == 1 + sum(
            c.get_descendant_count() for c in node.children
        )


# 5. Sorting
def test_get_sorted_places_smaller_clades_first():
    t = parse_newick("((A:1,B:1):1,C:2):0;")
    s = t.get_sorted()
    assert s.root.children[0].label == "C"
    # The original tree is untouched
    assert t.root.children[1].label == "C"


def test_get_sorted_reverse_and_stability():
    t = parse_newick("(A:2,(B:1,C:1):1,D:2,(E:1,F:1):1);")
    s = t.get_sorted()
    assert [c.label or "clade" for c in s.root.children] == ["A", "D", "clade", "clade"]
    assert [leaf.label for leaf in s.get_leaves()] == ["A", "D", "B", "C", "E", "F"]

    r = t.get_sorted(reverse=True)
    assert [leaf.label for leaf in r.get_leaves()] == ["B", "C", "E", "F", "A", "D"]


def test_get_sorted_keeps_ages_and_annotations():
    t = parse_newick("((A[&host=cat]:1,B:1):1,C:2);")
    s = t.get_sorted()
    a = [leaf for leaf in s.get_leaves() if leaf.label == "A"][0]
    assert a.annotation == {"host": "cat"}
    assert s.root.age == 2.0
    assert a.parent.age == 1.0


# 6. deep_copy
def test_deep_copy():
    tree = create_balanced_tree()
    copy_tree = tree.deep_copy()
    assert copy_tree is not tree, "deep_copy should create a distinct object"
    assert [n.label for n in copy_tree.get_leaves()] == ["D", "E", "F", "G"]
    assert copy_tree.children[0].parent is copy_tree
    assert copy_tree.children[0] is not tree.children[0]
    assert copy_tree.age == 2.0


def test_get_copy_is_independent():
    t = parse_newick("((A:1,B:1)[&support=90]:1,C:2);")
    c = t.get_copy()
    c.root.children[0].annotation["support"] = "10"
    assert t.root.children[0].annotation["support"] == "90"
    assert c.to_newick() != t.to_newick()


# 7. Leaves and internal nodes
def test_leaves_and_internal_nodes():
    tree = create_balanced_tree()
    assert [n.label for n in tree.get_leaves()] == ["D", "E", "F", "G"]
    internals = tree.get_internal_nodes()
    assert internals[0] is tree
    assert len(internals) == 3
    assert tree.children[0].get_internal_nodes() == [tree.children[0]]
    assert tree.children[0].children[0].get_internal_nodes() == []


# 8. Numbering
def test_numbering_leaves_first():
    t = TimeTree(create_balanced_tree())
    assert t.get_leaf_count() == 4
    assert t.get_node_count() == 7
    assert [n.number for n in t.get_leaves()] == [1, 2, 3, 4]
    assert [n.number for n in t.get_internal_nodes()] == [5, 6, 7]
    assert t.get_internal_nodes()[0] is t.root
    assert sorted(n.number for n in t.get_nodes()) == list(range(1, 8))
    assert t.get_leaf_count() + len(t.get_internal_nodes()) == t.get_node_count()


def test_single_node_tree():
    t = TimeTree(Node(label="A"))
    assert t.get_leaf_count() == 1
    assert t.get_node_count() == 1
    assert t.root.number == 1
    assert t.get_internal_nodes() == []


# 9. Display
def test_str_and_repr():
    t = parse_newick("((A:1,B:1):1,C:2):0;")
    assert str(t) == "A phylogenetic tree with 3 leaves (5 nodes in total)"
    assert str(t.root) == "Root node (age: 2.0, children: 2, no label)"
    assert str(t.get_leaves()[2]) == "Non-root node (age: 0.0, children: 0, label: C)"
    assert repr(t.get_leaves()[0]) == "Node('A')"


# 10. Newick output
def test_to_newick_uses_edge_lengths():
    t = parse_newick("((A:1,B:1):1,C:2):0;")
    assert t.to_newick() == "((A:1.0,B:1.0):1.0,C:2.0):0.0;"


def test_to_newick_quotes_and_annotations():
    root = Node(age=1.0)
    root.add_child(Node(label="Homo sapiens", annotation={"rate": "0.5", "host": "big cat"}))
    root.add_child(Node(label="it's"))
    assert (
        root.to_newick()
        == "('Homo sapiens'[&rate=0.5,host='big cat']:1.0,\"it's\":1.0):0.0"
    )


def test_to_newick_quotes_empty_and_number_like_annotations():
    root = Node(age=1.0)
    root.add_child(Node(label="A", annotation={"k": "", "": "x", "1abc": "2e"}))
    root.add_child(Node(label=""))
    assert root.to_newick() == "(A[&k='',''=x,'1abc'='2e']:1.0,:1.0):0.0"


def test_annotations_with_empty_strings_read_back():
    for newick in [
        "(A[&k='']:1,B:1);",
        "(A[&''=x]:1,B:1);",
        "(A[&k='1abc',\"it's\"=-2.5e3]:1,B:1);",
    ]:
        t = parse_newick(newick)
        again = parse_newick(t.to_newick())
        assert again.get_leaves()[0].annotation == t.get_leaves()[0].annotation
        assert again.to_newick() == t.to_newick()


def test_star_tree_edge_lengths():
    root = create_star_tree(3.0, ["L1", "L2", "L3"])
    assert [c.edge_length() for c in root.children] == [3.0, 3.0, 3.0]


def test_to_dict():
    t = parse_newick("(A:1,B[&x=1]:1);")
    d = t.to_dict()
    assert d["age"] == 1.0
    assert d["number"] == 3
    assert [c["label"] for c in d["children"]] == ["A", "B"]
    assert d["children"][1]["annotation"] == {"x": "1"}
