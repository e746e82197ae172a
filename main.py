from fastapi import FastAPI

from db import init_db
from routes import forecast, rules, timeline, upcoming

app = FastAPI(title="Recurring Forecast")


@app.on_event("startup")
def startup():
    init_db()


app.include_router(rules.router)
app.include_router(forecast.router)
app.include_router(timeline.router)
app.include_router(upcoming.router)


@app.get("/health")
def health():
    return {"status": "ok"}
