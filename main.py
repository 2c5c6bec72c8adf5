import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse

from translator_api.api.routes import router
from translator_api.core.config import Settings, settings
from translator_api.core.errors import (
    InternalError,
    RecordNotSavedError,
    StoreError,
    UpstreamError,
    ValidationError,
)
from translator_api.db.session import build_engine, build_session_factory, init_db

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s [%(levelname)s] %(message)s")
logger = logging.getLogger(__name__)

TRANSLATION_FAILED = "Translation failed. Please try again."


def describe_request_errors(exc: RequestValidationError) -> str:
    missing = [str(err["loc"][-1]) for err in exc.errors() if err["type"] == "missing"]
    if missing:
        return "Missing required fields: " + ", ".join(missing)
    problems = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"] if part != "body") or "body"
        problems.append(f"{field}: {err['msg']}")
    return "Invalid request: " + "; ".join(problems)


# --- Error handlers ---
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse({"error": describe_request_errors(exc)}, status_code=status.HTTP_400_BAD_REQUEST)


async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse({"error": exc.message}, status_code=status.HTTP_400_BAD_REQUEST)


async def upstream_error_handler(request: Request, exc: UpstreamError):
    # cause is already logged by the gateway
    return JSONResponse({"error": TRANSLATION_FAILED}, status_code=status.HTTP_502_BAD_GATEWAY)


async def record_not_saved_handler(request: Request, exc: RecordNotSavedError):
    return JSONResponse(
        {"error": exc.message, "translated_message": exc.translated_text},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def store_error_handler(request: Request, exc: StoreError):
    # store failures answer 400 with the store message; unexpected errors stay 500
    return JSONResponse({"error": exc.message}, status_code=status.HTTP_400_BAD_REQUEST)


async def internal_error_handler(request: Request, exc: Exception):
    if not isinstance(exc, InternalError):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse({"error": "Internal server error"}, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db(app.state.engine)
    logger.info("Record tables ready")
    yield


def create_app(config: Settings = settings) -> FastAPI:
    app = FastAPI(title="Translator API", lifespan=lifespan)
    app.state.settings = config
    app.state.engine = build_engine(config)
    app.state.SessionLocal = build_session_factory(app.state.engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(UpstreamError, upstream_error_handler)
    app.add_exception_handler(RecordNotSavedError, record_not_saved_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(InternalError, internal_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)

    app.include_router(router, prefix="/api")
    app.add_api_route("/", root, methods=["GET"], response_class=HTMLResponse, include_in_schema=False)
    return app


# --- Operator page ---
def root():
    html_content = """
    <!doctype html>
    <html>
      <head>
        <meta charset="utf-8"/>
        <title>Translator</title>
        <style>
            body { font-family: Arial; background-color: #f4f6f8; color: #333; padding: 20px; }
            .container { max-width: 600px; margin: auto; background: white; padding: 2rem; border-radius: 12px; box-shadow: 0 4px 12px rgba(0,0,0,0.1); }
            select, button, textarea { width: 100%; padding: 10px; margin-top: 5px; border-radius: 5px; border: 1px solid #ccc; }
            button { background-color: #0078D7; color: white; cursor: pointer; }
            button:disabled { background-color: #999; }
            .error { color: #c0392b; margin-top: 10px; }
            .result { margin-top: 20px; padding: 10px; background-color: #e0e0e0; border-radius: 5px; }
            .row { border: 1px solid #ddd; padding: 10px; border-radius: 5px; margin-top: 10px; font-size: 14px; }
        </style>
      </head>
      <body>
        <div class="container">
          <h2>Translation App</h2>
          <select id="model" onchange="fillLanguages()"></select>
          <select id="language"></select>
          <textarea id="message" placeholder="Enter text to translate"></textarea>
          <button id="translate" onclick="runTranslation()">Translate</button>
          <div id="error" class="error"></div>
          <div id="result" class="result"></div>
          <h3>Previous Translations</h3>
          <div id="history"></div>
        </div>

        <script>
        let catalog = {};

        async function loadModels(){
            const res = await fetch('/api/models');
            catalog = (await res.json()).models;
            document.getElementById('model').innerHTML =
                Object.keys(catalog).map(m => `<option value="${m}">${m}</option>`).join('');
            fillLanguages();
        }

        function fillLanguages(){
            const model = document.getElementById('model').value;
            document.getElementById('language').innerHTML =
                (catalog[model] || []).map(l => `<option value="${l}">${l}</option>`).join('');
        }

        async function loadHistory(){
            const res = await fetch('/api/translations');
            const rows = await res.json();
            const box = document.getElementById('history');
            box.innerHTML = '';
            rows.forEach(r => {
                const div = document.createElement('div');
                div.className = 'row';
                div.innerText = `Original: ${r.original_message}\\nTranslated: ${r.translated_message}\\nLanguage: ${r.language}\\nModel: ${r.model}`;
                box.appendChild(div);
            });
        }

        async function runTranslation(){
            const button = document.getElementById('translate');
            const errorBox = document.getElementById('error');
            errorBox.textContent = '';
            button.disabled = true;
            try {
                const res = await fetch('/api/translate', {
                    method: 'POST',
                    headers: {'Content-Type': 'application/json'},
                    body: JSON.stringify({
                        message: document.getElementById('message').value,
                        language: document.getElementById('language').value,
                        model: document.getElementById('model').value,
                    }),
                });
                const data = await res.json();
                if (data.translated_message) {
                    document.getElementById('result').innerText = data.translated_message;
                }
                if (!res.ok) {
                    errorBox.textContent = data.error;
                }
                await loadHistory();
            } finally {
                button.disabled = false;
            }
        }

        loadModels();
        loadHistory();
        </script>
      </body>
    </html>
    """
    return HTMLResponse(content=html_content)


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000)
