import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Annotated, TypeVar

import httpx
import typer
from pydantic import BaseModel

from bitbucket_server_client.config import AppConfig
from bitbucket_server_client.errors import ApiError
from bitbucket_server_client.models import (
    BuildStatusPostPayload,
    BuildStatusState,
    ChangeScope,
    PullRequestPostPayload,
    RefInfo,
    Reviewer,
)
from bitbucket_server_client.services.bitbucket_client import BitbucketClient

T = TypeVar("T")

app = typer.Typer(help="Bitbucket Data Center REST client", no_args_is_help=True)
auth_app = typer.Typer(help="Authentication commands")
build_status_app = typer.Typer(help="Commit build status commands")
pr_app = typer.Typer(help="Pull request commands")

app.add_typer(auth_app, name="auth")
app.add_typer(build_status_app, name="build-status")
app.add_typer(pr_app, name="pr")

ProjectOption = Annotated[
    str | None,
    typer.Option("--project", "-p", help="Project key (default: BITBUCKET_PROJECT_KEY)"),
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log HTTP traffic")] = False,
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="[%(levelname)s] %(name)s: %(message)s")


def _client(config: AppConfig) -> BitbucketClient:
    if not config.bitbucket_token:
        typer.secho("BITBUCKET_TOKEN is not set", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return BitbucketClient(
        config.rest_url,
        config.bitbucket_token,
        httpx.AsyncClient(timeout=config.bitbucket_timeout),
    )


def _run(client: BitbucketClient, call: Callable[[], Awaitable[T]]) -> T:
    async def runner() -> T:
        async with client:
            return await call()

    try:
        return asyncio.run(runner())
    except ApiError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from e


def _echo(result: BaseModel | None) -> None:
    if result is None:
        typer.echo("No content")
    else:
        typer.echo(result.model_dump_json(indent=2, exclude_none=True))


@auth_app.command("status")
def auth_status() -> None:
    config = AppConfig()
    typer.echo(f"Target Bitbucket: {config.rest_url}")
    typer.echo(f"Token configured: {'yes' if config.bitbucket_token else 'no'}")


@build_status_app.command("get")
def build_status_get(
    repository_slug: str,
    commit_id: str,
    project: ProjectOption = None,
    key: Annotated[str | None, typer.Option(help="Only the status with this key")] = None,
) -> None:
    config = AppConfig()
    client = _client(config)
    builder = (
        client.api()
        .build_status_get(project or config.bitbucket_project_key, repository_slug, commit_id)
        .key(key)
    )
    _echo(_run(client, lambda: builder.build().send()))


@build_status_app.command("post")
def build_status_post(
    repository_slug: str,
    commit_id: str,
    key: Annotated[str, typer.Option(help="Identifies the build across updates")],
    url: Annotated[str, typer.Option(help="Link to the build")],
    state: Annotated[BuildStatusState, typer.Option()] = BuildStatusState.INPROGRESS,
    project: ProjectOption = None,
    name: Annotated[str | None, typer.Option()] = None,
    description: Annotated[str | None, typer.Option()] = None,
    build_number: Annotated[str | None, typer.Option()] = None,
) -> None:
    config = AppConfig()
    client = _client(config)
    payload = BuildStatusPostPayload(
        key=key,
        state=state,
        url=url,
        name=name,
        description=description,
        buildNumber=build_number,
    )
    builder = client.api().build_status_post(
        project or config.bitbucket_project_key, repository_slug, commit_id, payload
    )
    _echo(_run(client, lambda: builder.build().send()))


@pr_app.command("changes")
def pr_changes(
    repository_slug: str,
    pull_request_id: int,
    project: ProjectOption = None,
    start: Annotated[int | None, typer.Option(min=0)] = None,
    limit: Annotated[int | None, typer.Option(min=1)] = None,
    change_scope: Annotated[ChangeScope | None, typer.Option()] = None,
    since_id: Annotated[str | None, typer.Option()] = None,
    until_id: Annotated[str | None, typer.Option()] = None,
) -> None:
    config = AppConfig()
    client = _client(config)
    builder = (
        client.api()
        .pull_request_changes_get(
            project or config.bitbucket_project_key, repository_slug, pull_request_id
        )
        .start(start)
        .limit(limit)
        .change_scope(change_scope)
        .since_id(since_id)
        .until_id(until_id)
    )
    _echo(_run(client, lambda: builder.build().send()))


@pr_app.command("create")
def pr_create(
    repository_slug: str,
    title: Annotated[str, typer.Option()],
    from_ref: Annotated[str, typer.Option(help="Source branch or ref")],
    to_ref: Annotated[str, typer.Option(help="Target branch or ref")] = "main",
    project: ProjectOption = None,
    description: Annotated[str | None, typer.Option()] = None,
    reviewer: Annotated[list[str] | None, typer.Option(help="Reviewer user name, repeatable")] = None,
) -> None:
    config = AppConfig()
    client = _client(config)
    project_key = project or config.bitbucket_project_key
    payload = PullRequestPostPayload(
        title=title,
        description=description,
        fromRef=RefInfo.branch(from_ref, repository_slug, project_key),
        toRef=RefInfo.branch(to_ref, repository_slug, project_key),
        reviewers=[Reviewer.named(name) for name in reviewer] if reviewer else None,
    )
    builder = client.api().pull_request_post(project_key, repository_slug, payload)
    _echo(_run(client, lambda: builder.build().send()))


if __name__ == "__main__":
    app()
