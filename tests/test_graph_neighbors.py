import unittest

from lnpanel.graph.build import build_graph
from lnpanel.graph.model import Viewport
from lnpanel.graph.neighbors import MissingHomeNode, extract_neighborhood, get_node_neighbors
from lnpanel.ingest.frames import EdgeTable, NodeTable


def make_graph(node_ids, edges, home="A"):
    nodes = NodeTable(
        ids=list(node_ids),
        names=[n.lower() for n in node_ids],
        last_updates=[0 for _ in node_ids],
        highlighted=[n == home for n in node_ids],
        colors=["#123456" for _ in node_ids],
    )
    table = EdgeTable(
        ids=[e[0] for e in edges],
        sources=[e[1] for e in edges],
        targets=[e[2] for e in edges],
        capacities=[e[3] if len(e) > 3 else 1_000_000 for e in edges],
    )
    return build_graph(nodes, table, viewport=Viewport(800, 600))


def ids(items):
    return [x.id for x in items]


class TestNeighborhood(unittest.TestCase):
    def setUp(self):
        # A-B-C chain; B has two channels.
        self.chain = make_graph("ABC", [("ab", "A", "B", 5_000_000), ("bc", "B", "C", 200_000_000)])

    def test_one_hop_leaves_out_far_end_of_last_channel(self):
        hood = extract_neighborhood(self.chain, depth=1, degree_range=(2, 30))
        self.assertEqual(ids(hood.nodes), ["A", "B"])
        # B's channels are collected even though C itself is not.
        self.assertEqual(ids(hood.edges), ["ab", "bc"])

    def test_one_hop_with_boundary_neighbors(self):
        hood = extract_neighborhood(self.chain, depth=1, degree_range=(2, 30), boundary_neighbors=True)
        self.assertEqual(ids(hood.nodes), ["A", "B", "C"])
        self.assertEqual(ids(hood.edges), ["ab", "bc"])

    def test_two_hops(self):
        hood = extract_neighborhood(self.chain, depth=2, degree_range=(2, 30))
        self.assertEqual(ids(hood.nodes), ["A", "B", "C"])
        self.assertEqual(ids(hood.edges), ["ab", "bc"])

    def test_zero_hops_keeps_home_and_its_channels(self):
        hood = extract_neighborhood(self.chain, depth=0, degree_range=(2, 30))
        self.assertEqual(ids(hood.nodes), ["A"])
        self.assertEqual(ids(hood.edges), ["ab"])

    def test_filtered_peer_is_shown_but_not_expanded(self):
        g = make_graph("HXYZ", [("hx", "H", "X"), ("xy", "X", "Y"), ("xz", "X", "Z")], home="H")
        wide = extract_neighborhood(g, depth=2, degree_range=(2, 30))
        self.assertEqual(ids(wide.nodes), ["H", "X", "Y", "Z"])

        narrow = extract_neighborhood(g, depth=2, degree_range=(2, 2))
        self.assertEqual(ids(narrow.nodes), ["H", "X"])
        self.assertEqual(ids(narrow.edges), ["hx"])

    def test_degree_range_is_inclusive(self):
        g = make_graph("HXYZ", [("hx", "H", "X"), ("xy", "X", "Y"), ("xz", "X", "Z")], home="H")
        hood = extract_neighborhood(g, depth=2, degree_range=(3, 3))
        self.assertEqual(ids(hood.nodes), ["H", "X", "Y", "Z"])

    def test_home_is_kept_regardless_of_degree(self):
        g = make_graph("AB", [], home="A")
        hood = extract_neighborhood(g, depth=2, degree_range=(2, 30))
        self.assertEqual(ids(hood.nodes), ["A"])
        self.assertEqual(hood.edges, [])
        self.assertIs(hood.home, g.node("A"))

    def test_missing_home_raises(self):
        g = make_graph("AB", [("ab", "A", "B")], home=None)
        with self.assertRaises(MissingHomeNode):
            extract_neighborhood(g)

    def test_first_flagged_node_is_home(self):
        g = make_graph("AB", [("ab", "A", "B")])
        g.nodes[1].is_home = True
        self.assertEqual(extract_neighborhood(g, depth=0).home.id, "A")

    def test_shadowed_home_row_resolves_to_lookup_node(self):
        nodes = NodeTable(
            ids=["A", "B", "A"],
            names=["old", "b", "new"],
            last_updates=[0, 0, 0],
            highlighted=[True, False, False],
            colors=["#fff", "#fff", "#fff"],
        )
        edges = EdgeTable(ids=["ab"], sources=["A"], targets=["B"], capacities=[1_000_000])
        g = build_graph(nodes, edges, viewport=Viewport(800, 600))
        hood = extract_neighborhood(g, depth=2)
        self.assertIs(hood.home, g.nodes[2])
        self.assertTrue(hood.home.is_home)
        self.assertEqual(hood.home.position, (400.0, 300.0))
        self.assertEqual(ids(hood.nodes), ["A", "B"])
        self.assertEqual([n.index for n in hood.nodes], [2, 1])

    def test_duplicate_edge_ids_both_returned(self):
        g = make_graph("AB", [("c1", "A", "B"), ("c1", "A", "B")])
        hood = extract_neighborhood(g, depth=1)
        self.assertEqual(len(hood.edges), 2)
        self.assertEqual(ids(hood.nodes), ["A", "B"])

    def test_results_are_unique(self):
        g = make_graph(
            "ABCD",
            [("ab", "A", "B"), ("bc", "B", "C"), ("ca", "C", "A"), ("cd", "C", "D"), ("db", "D", "B")],
        )
        nodes, edges = get_node_neighbors(g, g.node("A"), 3)
        self.assertEqual(len(ids(nodes)), len(set(ids(nodes))))
        self.assertEqual(len(edges), len({e.index for e in edges}))

    def test_boundary_neighbors_close_every_edge(self):
        g = make_graph(
            "ABCDEF",
            [
                ("ab", "A", "B"),
                ("ac", "A", "C"),
                ("bc", "B", "C"),
                ("bd", "B", "D"),
                ("de", "D", "E"),
                ("ef", "E", "F"),
                ("cf", "C", "F"),
            ],
        )
        for depth in range(4):
            hood = extract_neighborhood(g, depth=depth, degree_range=(1, 30), boundary_neighbors=True)
            present = set(ids(hood.nodes))
            for e in hood.edges:
                self.assertIn(e.source, present)
                self.assertIn(e.target, present)

    def test_extraction_does_not_touch_aggregates(self):
        before = [(n.degree, n.value, n.size) for n in self.chain.nodes]
        extract_neighborhood(self.chain, depth=2)
        self.assertEqual([(n.degree, n.value, n.size) for n in self.chain.nodes], before)

    def test_repeated_extraction_is_identical(self):
        h1 = extract_neighborhood(self.chain, depth=2)
        h2 = extract_neighborhood(self.chain, depth=2)
        self.assertEqual(ids(h1.nodes), ids(h2.nodes))
        self.assertEqual(ids(h1.edges), ids(h2.edges))


if __name__ == "__main__":
    unittest.main()
