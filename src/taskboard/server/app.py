"""
Companion board service
-----------------------
Serves the board over HTTP, backed by a SQLite database.

API:
    GET  /board  -> JSON board, or null if nothing was saved yet
    POST /board  -> JSON body: full board. Replaces the stored board.
                    Returns 200, 400 on malformed/invalid boards,
                    500 on database failures. Errors are {"error": message}.
"""

from __future__ import annotations

import logging
import sqlite3

from flask import Flask, jsonify, request

from ..errors import BoardError, BoardFormatError
from ..models import Board, validate
from .db import BoardDatabase

logger = logging.getLogger(__name__)


def create_app(database: BoardDatabase) -> Flask:
    """Create the Flask app serving one board database."""
    app = Flask(__name__)

    @app.get("/board")
    def get_board():
        try:
            board = database.read_board()
        except (sqlite3.Error, BoardError) as e:
            logger.error("GET /board failed: %s", e)
            return jsonify({"error": str(e)}), 500
        if board is None:
            return jsonify(None)
        return jsonify(board.to_json_dict())

    @app.post("/board")
    def post_board():
        payload = request.get_json(silent=True)
        try:
            board = Board.from_json_dict(payload)
        except BoardFormatError as e:
            return jsonify({"error": str(e)}), 400

        violations = validate(board)
        if violations:
            return jsonify({"error": "; ".join(violations)}), 400

        try:
            database.write_board(board)
        except sqlite3.Error as e:
            logger.error("POST /board failed: %s", e)
            return jsonify({"error": str(e)}), 500
        return "", 200

    return app


def run_server(database: BoardDatabase, host: str = "127.0.0.1", port: int = 3001) -> None:
    """Run the service with Flask's built-in server."""
    app = create_app(database)
    logger.info("Serving board from %s on %s:%d", database.db_path, host, port)
    app.run(host=host, port=port)
