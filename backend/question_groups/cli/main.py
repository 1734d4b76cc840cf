"""CLI entrypoint for the question grouping service."""

from __future__ import annotations

import json
import os
from typing import Optional

import requests
import typer

app = typer.Typer(name="qgrp", help="Question grouping command-line interface")

DEFAULT_HOST = "http://127.0.0.1:8000"


def _resolve_host(override: Optional[str]) -> str:
    if override:
        return override.rstrip('/')
    env_host = os.environ.get("QGRP_HOST")
    if env_host:
        return env_host.rstrip('/')
    return DEFAULT_HOST


def _request(method: str, path: str, host: Optional[str] = None, **kwargs) -> requests.Response:
    url = f"{_resolve_host(host)}{path}"
    resp = requests.request(method, url, timeout=60, **kwargs)
    if not resp.ok:
        try:
            detail = resp.json()
        except ValueError:
            detail = resp.text
        typer.echo(f"Request failed ({resp.status_code}): {detail}", err=True)
        raise typer.Exit(code=1)
    return resp


def _echo(payload: object) -> None:
    typer.echo(json.dumps(payload, indent=2))


@app.command()
def ask(
    course_id: int = typer.Argument(..., help="Course identifier"),
    title: str = typer.Argument(..., help="Question title"),
    body: str = typer.Option("", "--body", help="Question body"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Post a new question to a course."""
    resp = _request("POST", "/questions", host=host, json={"course_id": course_id, "title": title, "body": body})
    _echo(resp.json())


@app.command("list")
def list_questions(
    course_id: int = typer.Argument(..., help="Course identifier"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """List a course's questions, newest first."""
    resp = _request("GET", f"/questions/course/{course_id}", host=host)
    _echo(resp.json())


@app.command()
def groups(
    course_id: int = typer.Argument(..., help="Course identifier"),
    threshold: Optional[float] = typer.Option(None, "--threshold", min=0.0, max=1.0, help="Similarity threshold"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Show a course's questions grouped by similarity."""
    params = {"threshold": threshold} if threshold is not None else None
    resp = _request("GET", f"/questions/grouped/{course_id}", host=host, params=params)
    _echo(resp.json())


@app.command()
def similarity(
    text_a: str = typer.Argument(..., help="First text"),
    text_b: str = typer.Argument(..., help="Second text"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Compare the embeddings of two texts."""
    resp = _request("POST", "/similarity", host=host, json={"text_a": text_a, "text_b": text_b})
    _echo(resp.json())


@app.command()
def backfill(
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Embed every stored question that has no vector yet."""
    resp = _request("POST", "/admin/backfill", host=host)
    _echo(resp.json())


if __name__ == "__main__":
    app()
