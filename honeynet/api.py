"""HTTP surface for a presentation layer.

The UI polls ``/api/state`` after every action and renders what it gets;
all decisions stay in the engine.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .config import SimulationConfig
from .engine import HoneypotSimulation
from .errors import HoneynetError
from .scheduler import AsyncioScheduler
from .stats import summarize

log = logging.getLogger(__name__)


class RunningInput(BaseModel):
    running: bool


def get_simulation(request: Request) -> HoneypotSimulation:
    return request.app.state.simulation


def create_app(
    simulation: Optional[HoneypotSimulation] = None,
    config: Optional[SimulationConfig] = None,
    autostart: bool = False,
    allow_origins: tuple[str, ...] = ("http://localhost:5173",),
) -> FastAPI:
    """Build the API.

    Without a ready-made *simulation* one is created on startup, driven by
    the server's event loop.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.simulation is None:
            app.state.simulation = HoneypotSimulation(config, scheduler=AsyncioScheduler())
            log.info("simulation created on the server event loop")
        if autostart:
            app.state.simulation.set_running(True)
        yield
        app.state.simulation.set_running(False)

    app = FastAPI(title="honeynet", lifespan=lifespan)
    app.state.simulation = simulation

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(allow_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(HoneynetError)
    async def _engine_error(request: Request, exc: HoneynetError):
        return JSONResponse(status_code=409, content={"error": str(exc)})

    @app.get("/api/state")
    async def get_state(sim: HoneypotSimulation = Depends(get_simulation)):
        return sim.snapshot().to_dict()

    @app.get("/api/logs")
    async def get_logs(sim: HoneypotSimulation = Depends(get_simulation)):
        return {"logs": sim.snapshot().to_dict()["logs"]}

    @app.get("/api/stats")
    async def get_stats(sim: HoneypotSimulation = Depends(get_simulation)):
        return summarize(sim.snapshot())

    @app.post("/api/simulation")
    async def set_running(data: RunningInput,
                          sim: HoneypotSimulation = Depends(get_simulation)):
        changed = sim.set_running(data.running)
        return {"running": sim.running, "changed": changed}

    @app.post("/api/honeypots", status_code=201)
    async def add_honeypot(sim: HoneypotSimulation = Depends(get_simulation)):
        node = sim.manual_add_honeypot()
        return {"id": node.id, "label": node.label, "variant": node.variant}

    @app.post("/api/retirement/cancel")
    async def cancel_retirement(sim: HoneypotSimulation = Depends(get_simulation)):
        return {"cancelled": sim.cancel_retirement()}

    @app.post("/api/retirement/{node_id}/confirm")
    async def confirm_retirement(node_id: str,
                                 sim: HoneypotSimulation = Depends(get_simulation)):
        sim.confirm_retirement(node_id)
        return {"retired": node_id}

    return app
