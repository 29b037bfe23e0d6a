import importlib.util
import json
import os

import pytest

from crawler import logging_utils
from crawler.dungeon import DungeonConfig, GenerationReport, generate_dungeon, pipeline
from crawler.dungeon.tunnels import RoutingResult

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def _load_diagnose():
    spec = importlib.util.spec_from_file_location(
        "diagnose_seeds", os.path.join(ROOT, "scripts", "diagnose_seeds.py")
    )
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


def _drop_everything(grid, rooms, edges, config, candidates=None):
    return RoutingResult([], list(edges), {})


def test_report_counters_match_layout():
    d = generate_dungeon(seed=42)
    r = d.report
    assert r.seed == 42
    assert r.rooms_target == d.config.max_rooms
    assert r.rooms_placed == len(d.rooms)
    assert r.rooms_unplaced == r.rooms_target - r.rooms_placed
    assert 1 <= r.placement_attempts <= d.config.max_attempts
    assert r.candidate_edges == len(d.room_graph.edges)
    assert r.triangles == len(d.room_graph.triangles)
    assert r.loop_edges == len(d.edges) - r.mst_edges
    assert r.edges_routed == len(d.corridors)
    assert r.edges_dropped == len(r.dropped_edges)
    assert r.corridor_cells == d.corridor_cells()
    assert r.room_groups >= 1
    assert sum(r.candidate_rejections.values()) >= 0


def test_report_phase_timings():
    r = generate_dungeon(seed=1).report
    assert set(r.phase_ms) == {"place_rooms", "triangulate", "spanning_tree", "loop_edges", "route_corridors"}
    assert r.runtime_ms >= 0
    assert all(v >= 0 for v in r.phase_ms.values())


def test_report_to_dict_without_timings():
    r = GenerationReport(seed=3, rooms_target=7, rooms_placed=5, dropped_edges=[(0, 2)], room_groups=2)
    full = r.to_dict()
    assert full["rooms_unplaced"] == 2
    assert full["degraded"] is True
    assert full["dropped_edges"] == [[0, 2]]
    assert "runtime_ms" in full and "phase_ms" in full
    bare = r.to_dict(timings=False)
    assert "runtime_ms" not in bare and "phase_ms" not in bare
    json.dumps(full)


def test_report_not_degraded_for_single_group():
    assert not GenerationReport(room_groups=1).degraded
    assert not GenerationReport(room_groups=0).degraded
    assert GenerationReport(rooms_target=2, rooms_placed=4).rooms_unplaced == 0


def test_dropped_edges_reported_and_rooms_split(monkeypatch):
    monkeypatch.setattr(pipeline, "route_corridors", _drop_everything)
    d = generate_dungeon(seed=42)
    assert len(d.rooms) >= 2
    r = d.report
    assert r.edges_routed == 0
    assert r.edges_dropped == len(d.edges)
    assert r.dropped_edges == [(e.a, e.b) for e in d.edges]
    assert r.corridor_cells == 0
    assert r.room_groups == len(d.rooms)
    assert r.degraded


def test_summary_logged_to_stderr(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    generate_dungeon(seed=42)
    out, err = capsys.readouterr()
    assert out == ""
    assert "event=dungeon_generated" in err
    assert "seed=42" in err
    assert "logger=crawler.dungeon" in err


def test_summary_logged_as_json(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    monkeypatch.setattr(logging_utils, "JSON_MODE", True)
    d = generate_dungeon(seed=8)
    lines = [json.loads(line) for line in capsys.readouterr().err.splitlines()]
    summary = [rec for rec in lines if rec["event"] == "dungeon_generated"]
    assert len(summary) == 1
    assert summary[0]["rooms"] == len(d.rooms)
    assert summary[0]["level"] == "info"


def test_disconnected_layout_warns_and_debug_lists_drops(monkeypatch, capsys):
    monkeypatch.setattr(pipeline, "route_corridors", _drop_everything)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["debug"])
    d = generate_dungeon(seed=42)
    err = capsys.readouterr().err
    assert err.count("event=edge_dropped") == len(d.edges)
    assert "level=warn" in err and "event=rooms_disconnected" in err


def test_quiet_at_warn_for_connected_layout(capsys):
    d = generate_dungeon(seed=42)
    err = capsys.readouterr().err
    assert "dungeon_generated" not in err
    if not d.report.degraded:
        assert err == ""


def test_diagnose_script_summarises_seed():
    mod = _load_diagnose()
    res = mod.run_for_seed(42)
    report = generate_dungeon(DungeonConfig(seed=42)).report
    assert res["seed"] == 42
    assert res["issues"]["edges_dropped"] == report.edges_dropped
    assert res["issues"]["room_groups"] == report.room_groups
    assert res["ok"] is (report.room_groups <= 1)


def test_diagnose_script_main_prints_json(capsys, monkeypatch):
    for key in ("CRAWLER_WIDTH", "CRAWLER_HEIGHT", "CRAWLER_MAX_ROOMS"):
        monkeypatch.delenv(key, raising=False)
    mod = _load_diagnose()
    code = mod.main(["1", "2"])
    data = json.loads(capsys.readouterr().out)
    assert [r["seed"] for r in data["results"]] == [1, 2]
    assert code == (0 if all(r["ok"] for r in data["results"]) else 1)


@pytest.mark.parametrize("seed", [292372, 730727])
def test_default_diagnose_seeds_generate(seed):
    d = generate_dungeon(seed=seed)
    assert d.report.rooms_placed > 0
