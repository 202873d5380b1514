"""
In-memory stand-in for the supabase-py client used by the API tests.

Implements the query-builder subset the services call: select (with
embedded "alias:table!<src>_<col>_fkey(cols)" joins), insert, upsert,
update, delete, eq/neq/in_/gt/gte/lt/lte/ilike/is_/or_, order, limit,
offset, rpc("adjust_karma"), plus auth and storage.
"""
import copy
import re
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Dict, List, Optional


def _split_top_level(text: str) -> List[str]:
    parts, depth, current = [], 0, ""
    for ch in text:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        if ch == "," and depth == 0:
            parts.append(current.strip())
            current = ""
        else:
            current += ch
    if current.strip():
        parts.append(current.strip())
    return parts


def _parse_columns(text: str) -> Dict[str, Any]:
    spec = {"star": False, "columns": [], "embeds": []}
    for part in _split_top_level(text):
        if part == "*":
            spec["star"] = True
        elif "(" in part:
            head, inner = part.split("(", 1)
            inner = inner[:-1]
            alias = None
            if ":" in head:
                alias, head = head.split(":", 1)
            table, constraint = head.split("!", 1)
            spec["embeds"].append({
                "key": alias or table,
                "table": table,
                "constraint": constraint,
                "spec": _parse_columns(inner),
            })
        else:
            spec["columns"].append(part)
    return spec


def _ilike(value: Any, pattern: str) -> bool:
    if value is None:
        return False
    regex = "^" + ".*".join(re.escape(p) for p in pattern.split("%")) + "$"
    return re.match(regex, str(value), re.IGNORECASE) is not None


OPERATORS = {
    "eq": lambda v, x: v == x,
    "neq": lambda v, x: v != x,
    "gt": lambda v, x: v is not None and v > x,
    "gte": lambda v, x: v is not None and v >= x,
    "lt": lambda v, x: v is not None and v < x,
    "lte": lambda v, x: v is not None and v <= x,
    "ilike": _ilike,
    "in": lambda v, x: v in x,
    "is": lambda v, x: v is None if x in (None, "null") else v is x,
}


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table_name = table
        self.operation = "select"
        self.columns = "*"
        self.payload: Any = None
        self.filters: List[Any] = []
        self.ordering: List[Any] = []
        self._limit: Optional[int] = None
        self._offset = 0

    # operations
    def select(self, columns: str = "*", **kwargs):
        self.operation = "select"
        self.columns = columns
        return self

    def insert(self, payload):
        self.operation = "insert"
        self.payload = payload
        return self

    def upsert(self, payload):
        self.operation = "upsert"
        self.payload = payload
        return self

    def update(self, payload):
        self.operation = "update"
        self.payload = payload
        return self

    def delete(self):
        self.operation = "delete"
        return self

    # filters
    def _add(self, op: str, column: str, value: Any):
        self.filters.append((op, column, value))
        return self

    def eq(self, column, value):
        return self._add("eq", column, value)

    def neq(self, column, value):
        return self._add("neq", column, value)

    def gt(self, column, value):
        return self._add("gt", column, value)

    def gte(self, column, value):
        return self._add("gte", column, value)

    def lt(self, column, value):
        return self._add("lt", column, value)

    def lte(self, column, value):
        return self._add("lte", column, value)

    def ilike(self, column, pattern):
        return self._add("ilike", column, pattern)

    def in_(self, column, values):
        return self._add("in", column, list(values))

    def is_(self, column, value):
        return self._add("is", column, value)

    def or_(self, expression: str):
        clauses = []
        for clause in expression.split(","):
            column, op, value = clause.split(".", 2)
            clauses.append((op, column, value))
        self.filters.append(("or", clauses))
        return self

    # modifiers
    def order(self, column, desc: bool = False):
        self.ordering.append((column, desc))
        return self

    def limit(self, count: int):
        self._limit = count
        return self

    def offset(self, count: int):
        self._offset = count
        return self

    def _matches(self, row: Dict[str, Any]) -> bool:
        for f in self.filters:
            if f[0] == "or":
                if not any(OPERATORS[op](_as_text(row.get(col)), val) for op, col, val in f[1]):
                    return False
            else:
                op, column, value = f
                if not OPERATORS[op](row.get(column), value):
                    return False
        return True

    def execute(self):
        rows = self.db.tables.setdefault(self.table_name, [])
        if self.operation == "insert":
            return _result(self.db._insert(self.table_name, self.payload))
        if self.operation == "upsert":
            return _result(self.db._upsert(self.table_name, self.payload))

        matched = [row for row in rows if self._matches(row)]
        if self.operation == "update":
            for row in matched:
                row.update(copy.deepcopy(self.payload))
            return _result(copy.deepcopy(matched))
        if self.operation == "delete":
            self.db.tables[self.table_name] = [row for row in rows if not any(row is m for m in matched)]
            return _result(copy.deepcopy(matched))

        for column, desc in reversed(self.ordering):
            present = [r for r in matched if r.get(column) is not None]
            missing = [r for r in matched if r.get(column) is None]
            present.sort(key=lambda r: r[column], reverse=desc)
            matched = present + missing
        matched = matched[self._offset:]
        if self._limit is not None:
            matched = matched[:self._limit]
        spec = _parse_columns(self.columns)
        return _result([self.db._project(self.table_name, row, spec) for row in matched])


def _as_text(value: Any) -> Any:
    # or_() filter values arrive as strings
    return str(value) if value is not None and not isinstance(value, str) else value


def _result(data):
    return SimpleNamespace(data=data, count=len(data))


class FakeBucket:
    def __init__(self, storage: "FakeStorage", name: str):
        self.storage = storage
        self.name = name

    def upload(self, path, file, file_options=None):
        self.storage.objects[(self.name, path)] = file
        return SimpleNamespace(path=path)

    def get_public_url(self, path):
        return f"https://fake.supabase.co/storage/v1/object/public/{self.name}/{path}"


class FakeStorage:
    def __init__(self):
        self.objects: Dict[Any, bytes] = {}

    def from_(self, bucket: str) -> FakeBucket:
        return FakeBucket(self, bucket)


class FakeAuth:
    def __init__(self):
        self.accounts: Dict[str, Dict[str, Any]] = {}
        self.sign_up_calls = 0

    @staticmethod
    def token_for(user_id: str) -> str:
        return f"token-{user_id}"

    def _user(self, account):
        return SimpleNamespace(
            id=account["id"],
            email=account["email"],
            user_metadata=account["metadata"],
            app_metadata={},
            created_at=account["created_at"],
        )

    def _session(self, account):
        return SimpleNamespace(access_token=self.token_for(account["id"]))

    def sign_up(self, credentials):
        self.sign_up_calls += 1
        email = credentials["email"]
        if any(a["email"] == email for a in self.accounts.values()):
            raise Exception("User already registered")
        account = {
            "id": str(uuid.uuid4()),
            "email": email,
            "password": credentials["password"],
            "metadata": credentials.get("options", {}).get("data", {}),
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        self.accounts[account["id"]] = account
        return SimpleNamespace(user=self._user(account), session=self._session(account))

    def sign_in_with_password(self, credentials):
        for account in self.accounts.values():
            if account["email"] == credentials["email"] and account["password"] == credentials["password"]:
                return SimpleNamespace(user=self._user(account), session=self._session(account))
        raise Exception("Invalid login credentials")

    def get_user(self, jwt=None):
        user_id = (jwt or "").replace("token-", "", 1)
        account = self.accounts.get(user_id)
        if not account:
            raise Exception("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=self._user(account))

    def sign_out(self):
        return None


class FakeSupabase:
    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.auth = FakeAuth()
        self.storage = FakeStorage()
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rpc(self, name: str, params: Dict[str, Any]):
        if name != "adjust_karma":
            raise Exception(f"Unknown function {name}")
        for row in self.tables.get("users", []):
            if row["id"] == params["_user_id"]:
                row["karma_points"] = (row.get("karma_points") or 0) + params["_delta"]
        return SimpleNamespace(execute=lambda: _result([]))

    def _tick(self) -> str:
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()

    def _insert(self, table: str, payload) -> List[Dict[str, Any]]:
        rows = payload if isinstance(payload, list) else [payload]
        inserted = []
        for data in rows:
            row = {"id": str(uuid.uuid4()), "created_at": self._tick()}
            if table == "claims":
                row["claimed_at"] = row["created_at"]
            row.update(copy.deepcopy(data))
            self.tables.setdefault(table, []).append(row)
            inserted.append(copy.deepcopy(row))
        return inserted

    def _upsert(self, table: str, payload) -> List[Dict[str, Any]]:
        rows = payload if isinstance(payload, list) else [payload]
        saved = []
        for data in rows:
            existing = next((r for r in self.tables.get(table, []) if r["id"] == data.get("id")), None)
            if existing:
                existing.update(copy.deepcopy(data))
                saved.append(copy.deepcopy(existing))
            else:
                saved.extend(self._insert(table, data))
        return saved

    def _project(self, table: str, row: Dict[str, Any], spec: Dict[str, Any]) -> Dict[str, Any]:
        if spec["star"]:
            out = copy.deepcopy(row)
        else:
            out = {col: copy.deepcopy(row.get(col)) for col in spec["columns"]}
        for embed in spec["embeds"]:
            prefix = f"{table}_"
            column = embed["constraint"][len(prefix):-len("_fkey")]
            target = next(
                (r for r in self.tables.get(embed["table"], []) if r["id"] == row.get(column)),
                None
            )
            out[embed["key"]] = self._project(embed["table"], target, embed["spec"]) if target else None
        return out

    # test helpers
    def seed(self, table: str, **data) -> Dict[str, Any]:
        return self._insert(table, data)[0]

    def rows(self, table: str) -> List[Dict[str, Any]]:
        return self.tables.get(table, [])

    def create_account(self, email: str, password: str = "secret123", name: str = "Test User",
                       role: str = "user", location: str = "Berlin") -> Dict[str, Any]:
        response = self.auth.sign_up({
            "email": email,
            "password": password,
            "options": {"data": {"name": name, "role": role, "location": location}},
        })
        user_id = response.user.id
        self._upsert("users", {
            "id": user_id, "email": email, "name": name, "role": role,
            "location": location, "karma_points": 0,
        })
        return {"id": user_id, "token": response.session.access_token,
                "headers": {"Authorization": f"Bearer {response.session.access_token}"}}
