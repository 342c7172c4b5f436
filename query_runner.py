"""
CLI to run batches of campus path queries.

Reads a YAML query file, loads the DOT map it points at, answers every path
and meetup query, prints a short report and optionally writes results to CSV.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Sequence
import argparse
import csv
import logging
import time

from campus_backend import CampusBackend, parse_locations
from errors import NoCommonDestinationError

DEFAULT_CONFIG = Path(__file__).parent / "queries" / "campus.yml"

RESULT_FIELDS = [
    "kind",
    "name",
    "starts",
    "end",
    "found",
    "destination",
    "path",
    "cost",
]


@dataclass(frozen=True)
class PathQuery:
    start: str
    end: str


@dataclass(frozen=True)
class MeetupQuery:
    name: str
    starts: Sequence[str]


@dataclass(frozen=True)
class QueryConfig:
    graph_file: Path
    paths: Sequence[PathQuery]
    meetups: Sequence[MeetupQuery]


def load_config(path: Path) -> QueryConfig:
    """
    Parse a query file. graph_file is resolved relative to the query file.

    Raises:
        ValueError: if graph_file or a query's required keys are missing.
    """
    import yaml  # type: ignore

    data = yaml.safe_load(Path(path).read_text()) or {}
    if "graph_file" not in data:
        raise ValueError(f"{path}: 'graph_file' is required.")

    paths = []
    for i, item in enumerate(data.get("paths") or []):
        if "start" not in item or "end" not in item:
            raise ValueError(f"{path}: paths[{i}] needs 'start' and 'end'.")
        paths.append(PathQuery(start=str(item["start"]), end=str(item["end"])))

    meetups = []
    for i, item in enumerate(data.get("meetups") or []):
        if "starts" not in item:
            raise ValueError(f"{path}: meetups[{i}] needs 'starts'.")
        starts = item["starts"]
        if isinstance(starts, str):
            starts = parse_locations(starts)
        meetups.append(
            MeetupQuery(
                name=str(item.get("name", f"meetup-{i}")),
                starts=[str(s) for s in starts],
            )
        )

    return QueryConfig(
        graph_file=(Path(path).parent / data["graph_file"]).resolve(),
        paths=paths,
        meetups=meetups,
    )


def run_queries(config_path: Path, results_csv: Path | None = None) -> List[Dict[str, object]]:
    cfg = load_config(config_path)
    start = time.time()

    backend = CampusBackend()
    backend.load_graph_data(cfg.graph_file)
    print(f"[query] loaded {len(backend.list_locations())} locations from {cfg.graph_file.name}")

    results: List[Dict[str, object]] = []
    for query in cfg.paths:
        res = _run_path_query(backend, query)
        results.append(res)
        print(f"[query] path {query.start} -> {query.end}: {_describe(res)}")

    for meetup in cfg.meetups:
        res = _run_meetup_query(backend, meetup)
        results.append(res)
        print(f"[query] meetup {meetup.name}: {_describe(res)}")

    if results_csv:
        write_results_csv(results, results_csv)

    elapsed = time.time() - start
    print(f"[query] answered {len(results)} queries in {elapsed:.2f}s")
    return results


def _run_path_query(backend: CampusBackend, query: PathQuery) -> Dict[str, object]:
    path = backend.locations_on_shortest_path(query.start, query.end)
    times = backend.times_along(path)
    return {
        "kind": "path",
        "name": f"{query.start} -> {query.end}",
        "starts": [query.start],
        "end": query.end,
        "found": bool(path),
        "destination": query.end if path else None,
        "path": path,
        "times": times,
        "cost": sum(times) if path else None,
    }


def _run_meetup_query(backend: CampusBackend, query: MeetupQuery) -> Dict[str, object]:
    try:
        destination = backend.closest_destination_from_all(query.starts)
    except NoCommonDestinationError:
        destination = None

    cost = None
    if destination is not None:
        # Every start reaches destination, so these lookups cannot fail.
        cost = sum(
            sum(backend.times_on_shortest_path(s, destination)) for s in query.starts
        )

    return {
        "kind": "meetup",
        "name": query.name,
        "starts": list(query.starts),
        "end": None,
        "found": destination is not None,
        "destination": destination,
        "path": [],
        "times": [],
        "cost": cost,
    }


def _describe(res: Mapping[str, object]) -> str:
    if not res["found"]:
        return "not found"
    if res["kind"] == "path":
        return f"{' > '.join(res['path'])} (cost {res['cost']:.2f})"  # type: ignore[arg-type]
    return f"{res['destination']} (total cost {res['cost']:.2f})"


def write_results_csv(results: Iterable[Mapping[str, object]], path: Path) -> None:
    """
    Write query results to CSV, one row per query.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=RESULT_FIELDS)
        writer.writeheader()
        for res in results:
            writer.writerow(
                {
                    "kind": res.get("kind"),
                    "name": res.get("name"),
                    "starts": "; ".join(res.get("starts") or []),  # type: ignore[arg-type]
                    "end": res.get("end") or "",
                    "found": res.get("found"),
                    "destination": res.get("destination") or "",
                    "path": " > ".join(res.get("path") or []),  # type: ignore[arg-type]
                    "cost": "" if res.get("cost") is None else res.get("cost"),
                }
            )


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Answer campus shortest-path queries.")
    parser.add_argument("config", nargs="?", type=Path, default=DEFAULT_CONFIG)
    parser.add_argument("--csv", type=Path, default=None, help="write results to this CSV file")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    run_queries(args.config, results_csv=args.csv)
    if args.csv:
        print(f"Wrote results to {args.csv}")


if __name__ == "__main__":
    main()
