# shopcart/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

APP_NAME = os.getenv("APP_NAME", "Shopping Cart API")
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 3000))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
# merge | replace, see shopcart.domain.cart.DuplicatePolicy
CART_DUPLICATE_POLICY = os.getenv("CART_DUPLICATE_POLICY", "merge").lower()
