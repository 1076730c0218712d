# Run from project root: python -m app.main  (or: uvicorn app.main:app --reload --port 3000)

import logging

from fastapi import FastAPI

from app.api.routes import router
from app.core.config import LOG_LEVEL, PORT

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


app = FastAPI(
    title="Company Email Reply Service",
    description="Generates email replies grounded in company knowledge using OpenAI assistants",
    version="0.1.0",
)
app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    logger.info("Server listening on port %d", PORT)
    uvicorn.run(app, host="0.0.0.0", port=PORT)
