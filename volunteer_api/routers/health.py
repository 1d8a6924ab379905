from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()

@router.get("/", tags=["health"], response_class=PlainTextResponse)
def root():
    return "Hello World!"
