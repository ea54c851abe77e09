# multipole_orbits/main.py
import os
import json
import logging
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

import numpy as np

from multipole_orbits.cli import run_cli
from multipole_orbits.simulation.runner import run_simulation, describe_energy
from multipole_orbits.visualization.plots import plot_orbit_3d, plot_radius_over_time
from multipole_orbits.config import settings
from multipole_orbits.config.settings import RUN_ID_PREFIX, TIME_STEP

# --- Setup logger ------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-7s  %(message)s",
    datefmt="%H:%M:%S"
)
log = logging.getLogger("main")


def _to_jsonable(o: Any) -> Any:
    if isinstance(o, np.ndarray):
        return o.tolist()
    if isinstance(o, (np.floating, np.integer)):
        return o.item()
    return repr(o)


def save_json(obj: Any, name_prefix: str) -> str:
    ts = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    out_dir = Path(getattr(settings, "OUTPUT_DIR", "outputs"))
    out_dir.mkdir(parents=True, exist_ok=True)
    filename = out_dir / f"{name_prefix}_{ts}.json"
    with open(filename, "w") as f:
        json.dump(obj, f, indent=2, default=_to_jsonable)
    return str(filename)


def build_report(result: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "meta": {
            "dt": TIME_STEP,
            "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        },
        "params": result["params"],
        "energy": result["energy"],
        "classification": result["classification"],
        "points": result["points"],
        "expected_points": result["expected_points"],
        "complete": result["complete"],
        "fallback": result["fallback"],
        "trajectory": result["trajectory"],
    }


def main():
    try:
        # 1) Get inputs from CLI
        params = run_cli()
        log.info("Starting integration: T=%s, attractor=%s", params["final_time"], params["attractor_radius"])

        # 2) Integrate
        result = run_simulation(params)

        print("\n================ ORBIT RESULT ================\n")
        print(f"System Energy      : {describe_energy(result['energy'])}")
        print(f"Points             : {result['points']} / {result['expected_points']}")
        print(f"Full duration      : {result['complete']}")
        if result["fallback"]:
            log.warning("Integration was not possible; a placeholder orbit was returned.")
        elif not result["complete"]:
            log.info("Body struck the attractor before the final time.")

        # 3) Save report
        os.makedirs(getattr(settings, "OUTPUT_DIR", "outputs"), exist_ok=True)
        out_file = save_json(build_report(result), RUN_ID_PREFIX)
        log.info("Saved orbit report: %s", out_file)

        # 4) Plots (best-effort)
        try:
            plot_orbit_3d(result["trajectory"], params["attractor_radius"], result["energy"])
            plot_radius_over_time(result["trajectory"], params["attractor_radius"])
            log.info("Plots generated.")
        except Exception as e:
            log.warning("Plotting failed: %s", e)

    except Exception:
        log.error("Fatal exception during run:")
        traceback.print_exc()


if __name__ == "__main__":
    main()
