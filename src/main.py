from fastapi import FastAPI, HTTPException, Request, status, Depends
from fastapi.responses import JSONResponse, RedirectResponse, HTMLResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from pydantic import ValidationError

from logger import logger
from config.config import settings
from media.upload_gateway import UploadGateway, CloudinaryUploadGateway
from videos.videos_actions import VideosActionsHandler
from viewer.viewer_controller import ViewerController, UploadInProgressError
from viewer.videos_client import VideosClient
from viewer.viewer_renderer import viewer_page_template

# Initialize FastAPI app
app = FastAPI(title=settings.General.SERVICE_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.Server.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.exception(exc)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc)}
    )

@app.exception_handler(ValidationError)
async def validation_exception_handler(request: Request, exc: ValidationError):
    logger.exception(exc)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc)}
    )

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    logger.exception(exc)
    # Methods the videos route doesn't declare are rejected by the router
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED and request.url.path == settings.Viewer.VIDEOS_ENDPOINT:
        return VideosActionsHandler.method_not_allowed(request.method, headers={"Allow": "POST"})
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=exc.headers
    )

@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.exception(exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc)}
    )

##############
# Dependencies
##############

_upload_gateway = None
_viewer_controller = None

def get_upload_gateway() -> UploadGateway:
    global _upload_gateway
    if _upload_gateway is None:
        _upload_gateway = CloudinaryUploadGateway()
    return _upload_gateway

def get_viewer_controller() -> ViewerController:
    global _viewer_controller
    if _viewer_controller is None:
        _viewer_controller = ViewerController(VideosClient())
    return _viewer_controller

##############
# VIDEO APIs
##############

@app.api_route(
    settings.Viewer.VIDEOS_ENDPOINT,
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
)
def videos(request: Request, upload_gateway: UploadGateway = Depends(get_upload_gateway)):
    logger.info(f"[VIDEOS_API] {request.method} {request.url.path}")
    return VideosActionsHandler(upload_gateway).handle(request.method)

##############
# VIEWER
##############

@app.get("/", response_class=HTMLResponse)
def viewer_page(controller: ViewerController = Depends(get_viewer_controller)):
    state = controller.state
    groups_per_video = [controller.tag_groups(result) for result in state.results]
    return HTMLResponse(content=viewer_page_template(state, groups_per_video))

@app.post("/upload-video")
def upload_video(controller: ViewerController = Depends(get_viewer_controller)):
    try:
        controller.upload_video()
    except UploadInProgressError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
