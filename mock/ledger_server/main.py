from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pathlib import Path
import json

app = FastAPI(title="Mock Ledger Server", version="1.0.0")
DATA_DIR = Path("/data/ledger_stub")

@app.get("/health")
def health(): return {"status": "ok"}

@app.get("/ledger/balance")
def get_balance(wallet_address: str, mode: str = "ok"):
    if mode == "fail":
        return JSONResponse(content={"status": "error"}, status_code=500)
    file = DATA_DIR / f"balance_{wallet_address.lower()}.json"
    if not file.exists():
        raise HTTPException(status_code=404, detail="wallet not found")
    return JSONResponse(content=json.loads(file.read_text()))
