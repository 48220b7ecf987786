"""Batch workflow: produce N graph files in one output directory."""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Dict, List, Tuple

from langgraph.graph import END, START, StateGraph
from numpy.random import SeedSequence
from typing_extensions import TypedDict

from .config import BatchSettings
from .generator import run_generation
from .sampling import spawn_seeds
from .serializer import serialize

logger = logging.getLogger(__name__)


class BatchState(TypedDict):
    settings: BatchSettings
    output_dir: str
    seeds: List[SeedSequence]
    written: List[str]
    reports: List[Dict[str, Any]]


def graph_filename(index: int) -> str:
    return f"graph{index}.json"


class GraphBatch:
    """Generates and writes graphs one by one; only paths and reports are kept."""

    def __init__(self, settings: BatchSettings) -> None:
        self._settings = settings.validate()

    def run(self) -> Dict[str, Any]:
        workflow = self._build_workflow()
        result_state = workflow.invoke(
            {
                "settings": self._settings,
                "output_dir": str(self._settings.output_dir),
                "seeds": [],
                "written": [],
                "reports": [],
            }
        )
        return {
            "output_dir": result_state["output_dir"],
            "paths": list(result_state["written"]),
            "reports": list(result_state["reports"]),
        }

    def _build_workflow(self):
        graph = StateGraph(BatchState)
        graph.add_node("prepare_directory", self._prepare_directory)
        graph.add_node("plan_seeds", self._plan_seeds)
        graph.add_node("generate_graphs", self._generate_graphs)
        graph.add_edge(START, "prepare_directory")
        graph.add_edge("prepare_directory", "plan_seeds")
        graph.add_edge("plan_seeds", "generate_graphs")
        graph.add_edge("generate_graphs", END)
        return graph.compile()

    def _prepare_directory(self, state: BatchState) -> Dict[str, Any]:
        output_dir = Path(state["output_dir"])
        output_dir.mkdir(parents=True, exist_ok=True)
        return {"output_dir": str(output_dir)}

    def _plan_seeds(self, state: BatchState) -> Dict[str, Any]:
        settings = state["settings"]
        return {"seeds": spawn_seeds(settings.seed, settings.graph_count)}

    def _generate_graphs(self, state: BatchState) -> Dict[str, Any]:
        settings = state["settings"]
        output_dir = Path(state["output_dir"])
        jobs = list(enumerate(state["seeds"], start=1))

        def produce(job):
            index, seed = job
            return self._produce_one(settings, output_dir, index, seed)

        if settings.workers > 1 and len(jobs) > 1:
            with ThreadPoolExecutor(max_workers=settings.workers) as pool:
                results = list(pool.map(produce, jobs))
        else:
            results = [produce(job) for job in jobs]
        return {
            "written": [path for path, _ in results],
            "reports": [report for _, report in results],
        }

    @staticmethod
    def _produce_one(
        settings: BatchSettings, output_dir: Path, index: int, seed: SeedSequence
    ) -> Tuple[str, Dict[str, Any]]:
        logger.info("Generating graph %d of %d", index, settings.graph_count)
        graph, report = run_generation(settings.max_depth, settings.branch_factor, seed=seed)
        path = output_dir / graph_filename(index)
        path.write_text(serialize(graph), encoding="utf-8")
        return str(path), report


def run_batch(settings: BatchSettings) -> Dict[str, Any]:
    return GraphBatch(settings).run()
