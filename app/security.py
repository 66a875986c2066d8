import os
from jose import jwt
from dotenv import load_dotenv

load_dotenv()

# Los tokens los emite el servicio de autenticación; aquí solo se validan
SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
ALGORITHM = "HS256"

def decode_access_token(token: str) -> dict:
    return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
