import os

from dotenv import load_dotenv

load_dotenv()

TOP_CATEGORY_LIMIT = int(os.getenv("TOP_CATEGORY_LIMIT", "3"))
DOMAIN_RESULT_LIMIT = int(os.getenv("DOMAIN_RESULT_LIMIT", "20"))
