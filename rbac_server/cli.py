"""RBAC server CLI tool (rbacctl)."""

import typer

from rbac_server.core.config import settings

app = typer.Typer(name="rbacctl", help="RBAC server CLI")
db_app = typer.Typer(help="Document store commands")
app.add_typer(db_app, name="db")


def _store(path: str):
    from rbac_server.db.store import JsonDocumentStore
    return JsonDocumentStore(path)


@db_app.command("seed")
def db_seed(
    path: str = typer.Option(settings.DOCUMENT_PATH, help="Document path"),
    samples: bool = typer.Option(True, help="Also add one sample user per role"),
):
    """Seed permissions, roles, the super admin and sample users."""
    from rbac_server.db.seeds import seed_store

    document = seed_store(_store(path), samples=samples)
    typer.echo(
        f"✅ {path}: {len(document.users)} users, {len(document.roles)} roles, "
        f"{len(document.permissions)} permissions"
    )


@db_app.command("reset")
def db_reset(
    path: str = typer.Option(settings.DOCUMENT_PATH, help="Document path"),
    samples: bool = typer.Option(True, help="Also add one sample user per role"),
):
    """Discard the document and seed a fresh one (DANGER)."""
    confirm = typer.confirm(f"⚠️  This will DISCARD every user and role in {path}. Continue?")
    if not confirm:
        raise typer.Abort()
    from rbac_server.db.seeds import seed_store

    seed_store(_store(path), samples=samples, reset=True)
    typer.echo(f"✅ Document '{path}' reset")


@app.command("users")
def list_users(path: str = typer.Option(settings.DOCUMENT_PATH, help="Document path")):
    """List users with their role and priority."""
    document = _store(path).load()
    for user in document.users:
        role = document.find_role(user.role_id)
        flags = []
        if user.is_super_admin:
            flags.append("super-admin")
        if not user.is_active:
            flags.append("inactive")
        role_label = f"{role.name} (p{role.priority})" if role else "<missing role>"
        suffix = f" [{', '.join(flags)}]" if flags else ""
        typer.echo(f"  [{user.id}] {user.username} — {role_label}{suffix}")


@app.command("roles")
def list_roles(path: str = typer.Option(settings.DOCUMENT_PATH, help="Document path")):
    """List roles ordered by priority."""
    document = _store(path).load()
    for role in sorted(document.roles, key=lambda r: (r.priority, r.id)):
        system = " [system]" if role.is_system else ""
        typer.echo(
            f"  [{role.id}] p{role.priority} {role.name}{system} — "
            f"{len(document.users_with_role(role.id))} users, "
            f"{len(document.role_permissions(role))} permissions"
        )


@app.command("login")
def login(
    username: str = typer.Argument(..., help="Username"),
    password: str = typer.Option(..., prompt=True, hide_input=True, help="Password"),
    url: str = typer.Option("http://localhost:3001", help="API base URL"),
):
    """Log in against a running server and print the request headers to use."""
    import httpx
    resp = httpx.post(
        f"{url}/auth/login",
        json={"username": username, "password": password},
        timeout=10,
    )
    data = resp.json()
    if resp.status_code != 200:
        typer.echo(f"❌ {data.get('message', resp.text)}")
        raise typer.Exit(code=1)
    typer.echo(f"Authorization: Bearer {data['token']}")
    typer.echo(f"x-user-id: {data['user']['id']}")


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Host"),
    port: int = typer.Option(3001, help="Port"),
    reload: bool = typer.Option(False, help="Auto-reload"),
):
    """Start the API server."""
    import uvicorn
    uvicorn.run("rbac_server.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
