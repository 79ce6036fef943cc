# pixiu-backends

Small, self-contained backends to put behind an API gateway while testing its
routing and canary rules. Everything is kept in memory. The user services start
with the same two users, `tc` (code 1, id `0001`, age 18) and `ic` (code 2,
id `0002`, age 88), so gateway tests can assert on known answers.

## Installing

```
pip install .
pip install ".[test]"   # with the test dependencies
```

## Commands

### `pixiu-provider`

```
pixiu-provider --list
pixiu-provider query
pixiu-provider zookeeper --survival-timeout 5
```

Builds one of the named user providers (`http-dubbo`, `proxy`, `query`,
`resolve`, `triple-proxy-dubbo`, `triple-proxy-triple`, `uri`, `zookeeper`)
over a fresh store seeded with the two users, logs its reference and class
name, then waits for a termination signal. Hang-up signals are ignored; on any
other (interrupt, terminate, quit) it prints `provider app exit now...`, arms a
timer that forces an exit with status 1 after `--survival-timeout` seconds
(default 3) and returns. The `zookeeper` provider stamps its seed users with
the current time; the others use 2021-08-01T10:08:41Z.

### `pixiu-http-user`

```
pixiu-http-user --host 127.0.0.1 --port 20001
```

Serves `/com.dubbogo.pixiu.TripleUserService/GetUserById` (other paths get
404). A `POST` whose body is a JSON string naming a user answers
`{"message":"data is exist"}` when that name is known; otherwise it stores a
new user with a random five-letter id (and an empty name) and returns it as
JSON. Other methods get an empty 200 reply. Defaults are `127.0.0.1:20001`.

### `pixiu-traffic`

```
pixiu-traffic                 # untagged, port 1314
pixiu-traffic --server v1     # port 1315; v2 -> 1316, v3 -> 1317
```

Answers `/user`, `/user/pixiu`, `/prefix` and `/health` with a small JSON body
naming the last path segment, e.g. `{"message":"pixiu","status":200}`. With
`--server` the body also carries `"server": "v1"` (or `v2`, `v3`), which lets
canary and header-based routing be checked. `--host` and `--port` override the
bind address.

## Using the library

```python
from datetime import datetime, timezone

from pixiu_backends.userdb import UserDB, seed_users
from pixiu_backends.provider import UserProvider, UserNotFoundError

db = UserDB()
seed_users(db, datetime(2021, 8, 1, 10, 8, 41, tzinfo=timezone.utc))

provider = UserProvider(db, "UserProvider", "com.dubbogo.pixiu.User", 10)
user = provider.get_user_by_code(1)
print(user.to_dict())

try:
    provider.update_user_by_name("nobody", user)
except UserNotFoundError:
    print("no such user")
```

- `pixiu_backends.userdb`: `User` (with `to_dict()`), `UserDB` and
  `seed_users`. `UserDB.add` accepts a user only when it has a non-empty name,
  a positive code, and neither is taken yet.
- `pixiu_backends.provider`: `UserProvider` with `create_user`,
  `get_user_by_name`, `get_user_by_code`, `get_user_timeout` (sleeps
  `timeout_delay` seconds first), `get_user_by_name_and_age`, `update_user`
  and `update_user_by_name`. Failures raise `UserExistsError`,
  `UserNotFoundError` or `AddUserError`, all subclasses of `ProviderError`.
- `pixiu_backends.apps`: `ProviderApp`, `build_provider(app_name)` and the
  `APPS` table.
- `pixiu_backends.lifecycle`: `signal_stream()`, `wait_for_shutdown()` and
  `force_exit_timer()`.
- `pixiu_backends.httpuser`: `HttpUser`, `UserCache`, `random_id`,
  `handle_user_request` and `make_server`.
- `pixiu_backends.traffic`: `route_message`, `render_body` and `make_server`.

```python
from pixiu_backends.traffic import route_message, render_body

route_message("/user/pixiu")      # "pixiu"
render_body("user", "v1")         # '{"server": "v1","message":"user","status":200}'
```

## What this package does not do

`pixiu-provider` and `UserProvider` do not listen on the network: there is no
RPC protocol, serialisation format or service registry behind them, so a
gateway cannot call a provider directly. The provider is meant to be called in
process. There is no streaming greeter service. Only the HTTP user endpoint
and the traffic servers accept network requests.

## Running the tests

```
pytest
```