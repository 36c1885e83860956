import os, bcrypt, jwt
from datetime import datetime, timedelta
from dotenv import load_dotenv

load_dotenv()

JWT_SECRET = os.getenv("JWT_SECRET", "dev_secret_change_me")
JWT_ALG = "HS256"
JWT_EXP_DAYS = int(os.getenv("JWT_EXP_DAYS", "7"))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

def hash_password(raw: str) -> str:
    return bcrypt.hashpw(raw.encode(), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode()

def verify_password(raw: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(raw.encode(), hashed.encode())
    except ValueError:
        # malformed hash in storage
        return False

def create_token(sub: str, email: str, role: str, expires_delta: timedelta | None = None) -> str:
    now = datetime.utcnow()
    to_encode = {
        "sub": sub,
        "email": email,
        "role": role,
        "iat": now,
        "exp": now + (expires_delta or timedelta(days=JWT_EXP_DAYS)),
    }
    return jwt.encode(to_encode, JWT_SECRET, algorithm=JWT_ALG)

def create_user_token(user) -> str:
    return create_token(str(user.id), user.email, user.role)

def decode_token(token: str) -> dict:
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALG])
