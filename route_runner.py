"""
CLI to run batches of route queries against one street grid.

Reads a YAML config describing the grid weights and the queries, solves each
query with DijkstraSolver (optionally on a thread pool sharing the frozen
grid), and writes a per-query CSV.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence
import argparse
import csv
import time

from dijkstra_engine import DijkstraSolver
from errors import NoPathFound, UnknownNode
from graph import Direction, Graph
from grid_builder import build_manhattan_grid, node_path_ids
from manhattan_geometry import DEFAULT_DIRECTIONS
from nodes import Intersection


RESULT_FIELDS = [
    "name",
    "origin",
    "destination",
    "status",
    "cost",
    "hops",
    "path",
    "iterations",
    "duration_sec",
]


@dataclass(frozen=True)
class RouteQuery:
    name: str
    origin: Intersection
    destination: Intersection


@dataclass(frozen=True)
class RunConfig:
    east_weights: Sequence[Sequence[float]]
    south_weights: Sequence[Sequence[float]]
    queries: Sequence[RouteQuery]
    directions: Sequence[Direction] = DEFAULT_DIRECTIONS
    undirected: bool = False
    early_exit: bool = False


def load_config(path: Path) -> RunConfig:
    import yaml  # type: ignore

    data = yaml.safe_load(path.read_text()) or {}
    return parse_config(data)


def parse_config(data: Mapping[str, Any]) -> RunConfig:
    for key in ("east_weights", "south_weights", "queries"):
        if key not in data:
            raise ValueError(f"Route config is missing required key '{key}'")

    if not isinstance(data["queries"], list):
        raise ValueError("Route config key 'queries' must be a list")
    queries: List[RouteQuery] = []
    for i, q in enumerate(data["queries"]):
        if not isinstance(q, Mapping):
            raise ValueError(f"Route config key 'queries' entry {i} must be a mapping, got {q!r}")
        queries.append(
            RouteQuery(
                name=str(q.get("name", f"query_{i}")),
                origin=_parse_intersection(q, "origin"),
                destination=_parse_intersection(q, "destination"),
            )
        )
    directions = data.get("directions")
    return RunConfig(
        east_weights=_parse_weights(data, "east_weights"),
        south_weights=_parse_weights(data, "south_weights"),
        queries=queries,
        directions=_parse_directions(directions) if directions else DEFAULT_DIRECTIONS,
        undirected=bool(data.get("undirected", False)),
        early_exit=bool(data.get("early_exit", False)),
    )


def run_routes(
    config_path: Path,
    results_csv: Path | None = None,
    max_workers: int | None = None,
) -> List[Dict[str, object]]:
    cfg = load_config(config_path)
    start = time.time()

    graph = build_manhattan_grid(
        cfg.east_weights,
        cfg.south_weights,
        directions=cfg.directions,
        undirected=cfg.undirected,
    )
    print(f"[route] built grid with {len(graph)} intersections, queued {len(cfg.queries)} queries")

    results: List[Dict[str, object]] = []
    if max_workers and max_workers > 1:
        # The grid is frozen and every solve owns its own state.
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_index = {
                executor.submit(solve_query, graph, q, cfg.early_exit): i
                for i, q in enumerate(cfg.queries)
            }
            indexed: Dict[int, Dict[str, object]] = {}
            for future in as_completed(future_to_index):
                res = future.result()
                indexed[future_to_index[future]] = res
                _report(res)
        # Keep results in config order regardless of completion order.
        results = [indexed[i] for i in sorted(indexed)]
    else:
        print("[route] using sequential execution")
        for q in cfg.queries:
            res = solve_query(graph, q, cfg.early_exit)
            results.append(res)
            _report(res)

    if results_csv:
        write_results_csv(results, results_csv)

    elapsed = time.time() - start
    print(f"[route] completed {len(results)} queries in {elapsed:.2f}s")
    return results


def solve_query(graph: Graph, query: RouteQuery, early_exit: bool = False) -> Dict[str, object]:
    """
    Solve one query. Unreachable or unknown endpoints are recorded as a
    status rather than raised, so one bad query doesn't sink the batch.
    """
    solver = DijkstraSolver(early_exit=early_exit)
    res: Dict[str, object] = {
        "name": query.name,
        "origin": query.origin.id,
        "destination": query.destination.id,
        "status": "ok",
        "cost": None,
        "hops": None,
        "path": None,
        "iterations": 0,
    }

    start = time.time()
    try:
        state = solver.run(query.origin, query.destination, graph)
        res["iterations"] = state.iterations
        path = solver.reconstruct_path(state)
        res["cost"] = state.distance[query.destination]
        res["hops"] = len(path) - 1
        res["path"] = node_path_ids(path)
    except NoPathFound as exc:
        res["status"] = "no_path"
        res["error"] = str(exc)
    except UnknownNode as exc:
        res["status"] = "unknown_node"
        res["error"] = str(exc)
    res["duration_sec"] = time.time() - start
    return res


def write_results_csv(results: Sequence[Mapping[str, object]], path: Path) -> None:
    """
    Write per-query results to CSV; paths are joined with ' > '.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=RESULT_FIELDS)
        writer.writeheader()
        for res in results:
            nodes = res.get("path")
            writer.writerow(
                {
                    "name": res.get("name"),
                    "origin": res.get("origin"),
                    "destination": res.get("destination"),
                    "status": res.get("status"),
                    "cost": res.get("cost"),
                    "hops": res.get("hops"),
                    "path": " > ".join(nodes) if nodes else "",
                    "iterations": res.get("iterations", 0),
                    "duration_sec": res.get("duration_sec", 0.0),
                }
            )


def _report(res: Mapping[str, object]) -> None:
    if res["status"] == "ok":
        print(
            f"[route] completed name={res['name']} cost={res['cost']} "
            f"hops={res['hops']} duration={res['duration_sec']:.4f}s"
        )
    else:
        print(f"[route] failed name={res['name']} status={res['status']}: {res.get('error')}")


def _parse_intersection(query: Mapping[str, Any], key: str) -> Intersection:
    value = query.get(key)
    if (
        not isinstance(value, (list, tuple))
        or len(value) != 2
        or not all(isinstance(v, int) and not isinstance(v, bool) for v in value)
    ):
        raise ValueError(f"Query '{key}' must be an [x, y] pair, got {value!r}")
    return Intersection(int(value[0]), int(value[1]))


def _parse_weights(data: Mapping[str, Any], key: str) -> List[List[float]]:
    rows = data[key]
    if not isinstance(rows, list) or not all(isinstance(row, list) for row in rows):
        raise ValueError(f"Route config key '{key}' must be a list of lists, got {rows!r}")
    return [[_parse_weight(key, w) for w in row] for row in rows]


def _parse_weight(key: str, value: Any) -> float:
    # YAML has no literal for infinity that survives every loader; accept a string.
    if isinstance(value, str) and value.strip().lower() in ("inf", "none", "closed"):
        return float("inf")
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"Route config key '{key}' has invalid weight {value!r}")
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"Route config key '{key}' has invalid weight {value!r}") from None


def _parse_directions(names: Sequence[str]) -> tuple[Direction, ...]:
    out = []
    for name in names:
        try:
            out.append(Direction[str(name).upper()])
        except KeyError:
            raise ValueError(f"Unknown direction {name!r} in route config") from None
    return tuple(out)


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Solve shortest routes on a Manhattan street grid.")
    parser.add_argument(
        "config",
        nargs="?",
        type=Path,
        default=Path(__file__).parent / "routes" / "routes.yml",
        help="YAML file with grid weights and queries",
    )
    parser.add_argument("--out", type=Path, default=None, help="CSV file for per-query results")
    parser.add_argument("--workers", type=int, default=None, help="solve queries on a thread pool")
    args = parser.parse_args(argv)

    results = run_routes(args.config, results_csv=args.out, max_workers=args.workers)
    for res in results:
        print(res)
    if args.out:
        print(f"Wrote results to {args.out}")


if __name__ == "__main__":
    main()
