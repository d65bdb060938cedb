import json
import tempfile
import unittest
from pathlib import Path

from typer.testing import CliRunner

from lnpanel.cli import app


PAYLOAD = {
    "nodes": [
        {"id": "A", "title": "alice", "mainstat": "true", "color": "#ff0000"},
        {"id": "B", "title": "bob", "color": "#00ff00"},
        {"id": "C", "title": "carol", "color": "#0000ff"},
    ],
    "edges": [
        {"id": "ab", "source": "A", "target": "B", "mainstat": 5000000},
        {"id": "bc", "source": "B", "target": "C", "mainstat": 200000000},
    ],
}


class TestCli(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)
        self.input = self.dir / "graph.json"
        self.input.write_text(json.dumps(PAYLOAD), encoding="utf-8")

    def tearDown(self):
        self.tmp.cleanup()

    def test_fields(self):
        res = self.runner.invoke(app, ["fields"])
        self.assertEqual(res.exit_code, 0, res.output)
        self.assertIn("edges_fields", json.loads(res.output))

    def test_render_to_file(self):
        out = self.dir / "out" / "chart.json"
        res = self.runner.invoke(
            app,
            ["render", "--input", str(self.input), "--out", str(out), "--depth", "1", "--width", "400", "--height", "200"],
        )
        self.assertEqual(res.exit_code, 0, res.output)
        option = json.loads(out.read_text(encoding="utf-8"))
        self.assertEqual(option["title"]["text"], "1 nodes, 2 channels within 1 hops")
        home = option["series"][0]["data"][0]
        self.assertEqual((home["x"], home["y"]), (200.0, 100.0))

    def test_render_boundary_neighbors(self):
        res = self.runner.invoke(app, ["render", "--input", str(self.input), "--depth", "1", "--boundary-neighbors"])
        self.assertEqual(res.exit_code, 0, res.output)
        option = json.loads(res.stdout)
        self.assertEqual([d["name"] for d in option["series"][0]["data"]], ["A", "B", "C"])

    def test_render_without_home_fails(self):
        payload = {"nodes": [{"id": "A"}], "edges": []}
        path = self.dir / "nohome.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        res = self.runner.invoke(app, ["render", "--input", str(path)])
        self.assertEqual(res.exit_code, 2)

    def test_render_with_bad_capacity_fails_cleanly(self):
        payload = {
            "nodes": [{"id": "A", "mainstat": "true"}, {"id": "B"}],
            "edges": [{"id": "ab", "source": "A", "target": "B", "mainstat": "lots"}],
        }
        path = self.dir / "bad.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        res = self.runner.invoke(app, ["render", "--input", str(path)])
        self.assertEqual(res.exit_code, 2)
        self.assertNotIsInstance(res.exception, ValueError)

    def test_bad_degree_range(self):
        res = self.runner.invoke(app, ["render", "--input", str(self.input), "--min-degree", "5", "--max-degree", "1"])
        self.assertNotEqual(res.exit_code, 0)

    def test_stats(self):
        res = self.runner.invoke(app, ["stats", "--input", str(self.input), "--depth", "2"])
        self.assertEqual(res.exit_code, 0, res.output)
        self.assertIn("Channel Graph", res.output)
        self.assertIn("alice", res.output)

    def test_convert(self):
        dump = {
            "nodes": [
                {"pub_key": "02aa", "alias": "home", "color": "#3399ff", "last_update": 1700000000},
                {"pub_key": "03bb", "alias": "peer", "color": "#112233", "last_update": 1700000100},
            ],
            "edges": [{"channel_id": "1", "node1_pub": "02aa", "node2_pub": "03bb", "capacity": "5000000"}],
        }
        src = self.dir / "describegraph.json"
        src.write_text(json.dumps(dump), encoding="utf-8")
        out = self.dir / "nodegraph.json"
        res = self.runner.invoke(app, ["convert", "--describegraph", str(src), "--identity", "02aa", "--out", str(out)])
        self.assertEqual(res.exit_code, 0, res.output)
        payload = json.loads(out.read_text(encoding="utf-8"))
        self.assertEqual(payload["nodes"][0]["mainstat"], "true")
        self.assertEqual(payload["edges"][0]["mainstat"], 5000000)


if __name__ == "__main__":
    unittest.main()
