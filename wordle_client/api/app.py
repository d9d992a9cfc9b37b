"""
FastAPI Application - HTTP backend for a browser front end.

Endpoints:
    GET    /api/v1/health                 Health check
    GET    /api/v1/game                   Current game snapshot
    POST   /api/v1/game/restart           Discard the game, start a new one
    POST   /api/v1/game/keys/screen       On-screen key ("A", "ENTER", "BKSP")
    POST   /api/v1/game/keys/physical     Physical key ("a", "Enter", "Backspace")
    WS     /api/v1/game/ws                Snapshot pushes; also accepts keys

The backend talks to the evaluator on the front end's behalf. Keys that
arrive while a guess is with the evaluator are dropped, not queued.
"""

from contextlib import asynccontextmanager
import json

from .. import __version__
from ..config import Settings
from ..session import InputSource


def create_app(service=None, settings=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (built from settings if not provided)
        settings: Optional Settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, WebSocket, WebSocketDisconnect
        from fastapi.concurrency import run_in_threadpool
        from fastapi.middleware.cors import CORSMiddleware
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from .schemas import GameStateResponse, KeyPressRequest, KeyPressResponse, HealthResponse

    settings = settings or Settings.from_env()
    api_service = service or APIService.from_settings(settings)

    # WebSocket connections
    ws_connections: list[WebSocket] = []

    @asynccontextmanager
    async def lifespan(app):
        await run_in_threadpool(api_service.start)
        yield
        ws_connections.clear()

    app = FastAPI(
        title="Wordle Client API",
        description="Browser backend for a remote word-guessing game.",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    async def broadcast(state: GameStateResponse):
        """Push a snapshot to every connected WebSocket."""
        dead_connections = []
        for ws in ws_connections:
            try:
                await ws.send_json({"type": "state_update", "payload": state.model_dump(mode="json")})
            except (WebSocketDisconnect, RuntimeError):
                dead_connections.append(ws)
        for ws in dead_connections:
            ws_connections.remove(ws)

    async def press(source: InputSource, key: str) -> KeyPressResponse:
        response = await run_in_threadpool(api_service.press_key, source, key)
        if response.state_changed:
            await broadcast(response.game_state)
        return response

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/game",
        response_model=GameStateResponse,
        tags=["Game"],
        summary="Get the current game snapshot",
    )
    async def get_game() -> GameStateResponse:
        return api_service.get_game_state()

    @app.post(
        "/api/v1/game/restart",
        response_model=GameStateResponse,
        tags=["Game"],
        summary="Start a new game",
    )
    async def restart_game() -> GameStateResponse:
        """Discard the current game and ask the evaluator for a new one."""
        state = await run_in_threadpool(api_service.restart)
        await broadcast(state)
        return state

    @app.post(
        "/api/v1/game/keys/screen",
        response_model=KeyPressResponse,
        tags=["Input"],
        summary="Press an on-screen key",
    )
    async def press_screen_key(request: KeyPressRequest) -> KeyPressResponse:
        return await press(InputSource.SCREEN, request.key)

    @app.post(
        "/api/v1/game/keys/physical",
        response_model=KeyPressResponse,
        tags=["Input"],
        summary="Forward a physical keyboard key",
    )
    async def press_physical_key(request: KeyPressRequest) -> KeyPressResponse:
        """
        Forward a `KeyboardEvent.key` value.

        `accepted=false` with no error code means the key was ignored and the
        browser should not swallow the event.
        """
        return await press(InputSource.PHYSICAL, request.key)

    # =========================================================================
    # WebSocket Endpoint
    # =========================================================================

    @app.websocket("/api/v1/game/ws")
    async def websocket_endpoint(websocket: WebSocket):
        """
        WebSocket for real-time updates.

        Messages from server:
        - state_update: Game snapshot changed
        - pong: Reply to ping
        - error: Bad message

        Messages from client:
        - ping: Keep-alive
        - key: {"type": "key", "source": "screen"|"physical", "key": "..."}
        """
        await websocket.accept()
        ws_connections.append(websocket)

        try:
            await websocket.send_json({
                "type": "state_update",
                "payload": api_service.get_game_state().model_dump(mode="json"),
            })

            while True:
                data = await websocket.receive_text()
                try:
                    message = json.loads(data)
                except json.JSONDecodeError:
                    await websocket.send_json({
                        "type": "error",
                        "payload": {"message": "Invalid JSON"},
                    })
                    continue

                if not isinstance(message, dict):
                    continue
                if message.get("type") == "ping":
                    await websocket.send_json({"type": "pong"})
                elif message.get("type") == "key":
                    try:
                        source = InputSource(message.get("source", "physical"))
                    except ValueError:
                        await websocket.send_json({
                            "type": "error",
                            "payload": {"message": "Unknown key source"},
                        })
                        continue
                    await press(source, str(message.get("key", "")))

        except WebSocketDisconnect:
            pass
        finally:
            if websocket in ws_connections:
                ws_connections.remove(websocket)

    # =========================================================================
    # Health
    # =========================================================================

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["Health"],
    )
    async def health_check() -> HealthResponse:
        return HealthResponse(
            status="healthy",
            service="wordle-client",
            version=__version__,
        )

    return app
