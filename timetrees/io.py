import json
from typing import Any, IO, List, Union

from timetrees.parser.newick_parser import parse_newick_trees
from timetrees.tree import Node, TimeTree


class TimeTreeEncoder(json.JSONEncoder):
    def default(self, o: Any):
        if isinstance(o, TimeTree):
            return o.root

        if isinstance(o, Node):
            return o.to_dict()

        return super().default(o)


def dump_json(tree: Union[TimeTree, Node], f: IO[str]):
    json.dump(tree, f, cls=TimeTreeEncoder)


def read_newick(path: str, force_list: bool = False) -> Union[TimeTree, List[TimeTree]]:
    """
    Read one or more Newick trees from a file.

    Returns a single tree when the file holds exactly one and ``force_list``
    is not set, otherwise a list of trees.
    """
    with open(path) as f:
        newick_string: str = f.read()

    trees = parse_newick_trees(newick_string)
    if len(trees) == 1 and not force_list:
        return trees[0]
    return trees


def write_newick(trees: Union[TimeTree, List[TimeTree]], path: str):
    if isinstance(trees, TimeTree):
        trees = [trees]
    with open(path, mode="w") as f:
        for tree in trees:
            f.write(tree.to_newick() + "\n")


def write_json(tree: Union[TimeTree, Node], path: str):
    with open(path, mode="w") as f:
        dump_json(tree, f)
