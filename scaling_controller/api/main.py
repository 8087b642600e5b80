from fastapi import FastAPI
from scaling_controller.api.routes.networks import router as networks_router

app = FastAPI(title="Scaling Controller API")

@app.get("/health")
def health():
    return {"status": "ok"}

app.include_router(networks_router)
