import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional, Union

from fastapi import Depends, FastAPI, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from jose import JWTError
from pydantic import BaseModel

from .api.client import PortalApiClient
from .api.config import ApiConfig
from .api.services.customers import CustomersService
from .api.services.inventory import InventoryService
from .api.services.notes import NotesService
from .api.services.tasks import TasksService
from .config import PortalSettings, get_settings
from .core.account import AccountService
from .core.actions import COMMENT_TITLE, ActionRecorder
from .core.auth import Authenticator
from .core.dashboard import DashboardService
from .core.session import FileSlot, SessionContext, SessionStore
from .exceptions import (
    InvalidCredentialsError,
    NotFoundError,
    PortalError,
    SubmitError,
    TransportError,
    UnexpectedError,
    ValidationError,
)
from .identity.directory import AdminDirectory
from .logging_conf import configure_logging
from .models import Administrator, AdministratorUpdate, CustomerDetail, CustomerNote, CustomerRow
from .security import SESSION_COOKIE, SessionTokens

logger = logging.getLogger("billing_portal.web")

ERROR_STATUS = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    TransportError: status.HTTP_502_BAD_GATEWAY,
    SubmitError: status.HTTP_502_BAD_GATEWAY,
    UnexpectedError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class LoginIn(BaseModel):
    username: str = ""
    password: str = ""
    remember: bool = False


class CommentIn(BaseModel):
    text: str = ""
    title: str = COMMENT_TITLE


class PromiseIn(BaseModel):
    amount: Optional[Union[str, int, float]] = None
    due_date: Optional[str] = None


class CollectionIn(BaseModel):
    collection_date: Optional[str] = None


class CustomerList(BaseModel):
    rows: List[CustomerRow]
    counts: Dict[str, int]


def create_app(settings: Optional[PortalSettings] = None,
               api_client: Optional[PortalApiClient] = None,
               directory: Optional[AdminDirectory] = None,
               session: Optional[SessionContext] = None,
               tokens: Optional[SessionTokens] = None) -> FastAPI:
    settings = settings or get_settings()
    api_client = api_client or PortalApiClient(ApiConfig.from_settings(settings))
    directory = directory or AdminDirectory.from_settings(settings)
    session = session or SessionContext(SessionStore(FileSlot(settings.session_path)))
    session.init()
    tokens = tokens or SessionTokens.from_settings(settings)

    customers = CustomersService(api_client)
    notes = NotesService(api_client)
    dashboard = DashboardService(customers, InventoryService(api_client), notes, settings)
    recorder = ActionRecorder(notes, TasksService(api_client), settings)
    authenticator = Authenticator(directory)
    accounts = AccountService(directory, session)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await api_client.aclose()

    app = FastAPI(title="Billing Portal", lifespan=lifespan)
    app.state.session = session
    app.state.dashboard = dashboard

    @app.exception_handler(PortalError)
    async def portal_error_handler(request: Request, exc: PortalError):
        status_code = next(
            (code for cls, code in ERROR_STATUS.items() if isinstance(exc, cls)),
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
        logger.info(
            "request_failed",
            extra={"evt": request.url.path, "decision": "reject", "reason": type(exc).__name__,
                   "status_code": status_code},
        )
        content: Dict[str, Any] = {"status": "error", "reason": exc.message}
        if isinstance(exc, SubmitError) and exc.response:
            content["detail"] = exc.response
        return JSONResponse(status_code=status_code, content=content)

    def _extract_token(request: Request) -> Optional[str]:
        auth = request.headers.get("Authorization")
        if auth and auth.startswith("Bearer "):
            return auth.split(" ", 1)[1]
        return request.cookies.get(SESSION_COOKIE)

    def current_admin(request: Request) -> Administrator:
        token = _extract_token(request)
        if not token:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="not logged in")
        try:
            payload = tokens.verify(token)
        except JWTError:
            logger.info("session_invalid", extra={"evt": request.url.path, "decision": "reject",
                                                  "reason": "invalid token", "status_code": 401})
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid token")
        admin = session.current()
        if admin is None or str(admin.id) != payload["sub"]:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="not logged in")
        return admin

    @app.get("/")
    async def health() -> Dict[str, Any]:
        return {"service": "Billing Portal", "portal_api": await api_client.health_check()}

    @app.post("/session", response_model=Administrator)
    async def login(body: LoginIn, response: Response) -> Administrator:
        admin = await authenticator.authenticate(body.username, body.password)
        session.set(admin, body.remember)
        token, _ = tokens.mint(admin)
        response.set_cookie(SESSION_COOKIE, token, httponly=True, samesite="strict",
                            max_age=tokens.ttl_minutes * 60 if body.remember else None)
        logger.info("login", extra={"evt": "login", "admin_id": admin.id, "remember": body.remember,
                                    "decision": "ok", "status_code": 200})
        return admin

    @app.get("/session", response_model=Administrator)
    def whoami(admin: Administrator = Depends(current_admin)) -> Administrator:
        return admin

    @app.delete("/session")
    def logout(response: Response, admin: Administrator = Depends(current_admin)) -> Dict[str, str]:
        session.clear()
        response.delete_cookie(SESSION_COOKIE)
        logger.info("logout", extra={"evt": "logout", "decision": "ok", "status_code": 200})
        return {"status": "ok"}

    @app.patch("/session/admin", response_model=Administrator)
    def update_admin(body: AdministratorUpdate,
                     admin: Administrator = Depends(current_admin)) -> Administrator:
        return accounts.update_details(admin, body)

    @app.get("/customers", response_model=CustomerList)
    async def list_customers(product: str = "all", city: str = "all", q: str = "",
                             admin: Administrator = Depends(current_admin)) -> CustomerList:
        snapshot = await dashboard.load()
        return CustomerList(
            rows=dashboard.rows(snapshot, product, city, q),
            counts=dashboard.product_counts(snapshot, city, q),
        )

    @app.get("/customers/{customer_id}", response_model=CustomerDetail)
    async def customer_detail(customer_id: int,
                              admin: Administrator = Depends(current_admin)) -> CustomerDetail:
        return await dashboard.customer_detail(customer_id)

    @app.post("/customers/{customer_id}/comments", response_model=CustomerNote)
    async def add_comment(customer_id: int, body: CommentIn,
                          admin: Administrator = Depends(current_admin)) -> CustomerNote:
        return await recorder.post_comment(customer_id, admin, body.text, body.title or COMMENT_TITLE)

    @app.post("/customers/{customer_id}/promise", response_model=CustomerNote)
    async def add_promise(customer_id: int, body: PromiseIn,
                          admin: Administrator = Depends(current_admin)) -> CustomerNote:
        return await recorder.record_promise(customer_id, admin, body.amount, body.due_date)

    @app.post("/customers/{customer_id}/collection")
    async def add_collection(customer_id: int, body: CollectionIn,
                             admin: Administrator = Depends(current_admin)) -> Dict[str, Any]:
        snapshot = dashboard.snapshot or await dashboard.load()
        customer = snapshot.customer(customer_id)
        if customer is None:
            raise NotFoundError(f"Customer {customer_id} not found")
        task = await recorder.schedule_collection(customer, admin, body.collection_date)
        return {"status": "ok", "task": task.model_dump()}

    return app


def main() -> None:
    import uvicorn

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, json_format=settings.LOG_JSON)
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
