"""Users — a small user directory served through a wren router.

Demonstrates:
- Class-based handlers registered as ``(Controller, "method")`` pairs
- Route ordering (``/user/profile/{id}`` before ``/user/{id}``)
- Middleware lists, the ``g`` namespace, and context accessors
- Not-found / not-allowed fallbacks and reverse links

Run:
    cd examples/users && python app.py
"""

import threading

from wren import Router
from wren.context import current, g, method, params

router = Router()

USERS: dict[str, dict[str, str]] = {
    "1": {"name": "Ada", "role": "admin"},
    "2": {"name": "Grace", "role": "editor"},
}
_users_lock = threading.Lock()

# Stands in for the token a transport would read from the request body
CSRF_TOKENS = {"POST": "post", "DELETE": "987654321"}
submitted_token: dict[str, str] = {}


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------


class AuthMiddleware:
    """CSRF checks per HTTP method. Raising stops the handler from running."""

    def check(self) -> None:
        expected = CSRF_TOKENS.get(method())
        if submitted_token.get("csrf") != expected:
            raise PermissionError("error on csrf")


def load_user() -> None:
    """Look up the user named by ``{id}`` and hand it to the handler via ``g``."""
    user = USERS.get(params()["id"])
    if user is None:
        raise LookupError(f"no user {params()['id']}")
    g.user = user


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


class UserController:
    def index(self) -> dict[str, list[str]]:
        return {"users": [router.link("user.show", {"id": uid}) for uid in sorted(USERS)]}

    def show(self, id: str) -> str:
        user = USERS.get(id)
        if user is None:
            return f"No user {id}"
        return f"{user['name']} ({router.link('user.profile', {'id': id})})"

    def profile(self, id: str) -> dict[str, str]:
        return {"id": id, **g.user, "self": current()}

    def create(self) -> str:
        with _users_lock:
            uid = str(len(USERS) + 1)
            USERS[uid] = {"name": f"user{uid}", "role": "viewer"}
        return router.link("user.show", {"id": uid})

    def delete(self, id: str) -> str:
        with _users_lock:
            USERS.pop(id, None)
        return f"deleted {g.user['name']}"


router.get("/users", (UserController, "index"), name="user.index")
router.get(
    "/user/profile/{id}",
    (UserController, "profile"),
    middleware=load_user,
    name="user.profile",
)
router.get("/user/{id}", (UserController, "show"), name="user.show")
router.post("/user", (UserController, "create"), middleware=(AuthMiddleware, "check"))
router.delete(
    "/user/{id}",
    (UserController, "delete"),
    middleware=[(AuthMiddleware, "check"), load_user],
    name="user.delete",
)


@router.route("/files/{name}.{ext}", name="file")
def show_file(name: str, ext: str) -> str:
    return f"{name} as {ext}"


@router.not_found
def not_found() -> str:
    return f"Nothing at {current()}"


@router.not_allowed
def not_allowed() -> str:
    return f"{method()} is not supported"


if __name__ == "__main__":
    for verb, path in [
        ("GET", "/users"),
        ("GET", "/user/profile/1"),
        ("GET", "/user/2"),
        ("GET", "/files/report.pdf"),
        ("GET", "/nope"),
        ("PUT", "/user/1"),
    ]:
        outcome = router.dispatch(verb, path)
        print(f"{outcome.status} {verb} {path} -> {outcome.result!r}")
