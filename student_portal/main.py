import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from student_portal.core import config
from student_portal.database import SessionLocal, ensure_schema
from student_portal.routes import auth_routes, student_routes
from student_portal.services.seed import seed_demo_data

logging.basicConfig(level=config.LOG_LEVEL)

app = FastAPI(title='Student Portal API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        ensure_schema()
        if config.SEED_DEMO_DATA:
            db = SessionLocal()
            try:
                seed_demo_data(db, config.DEMO_PASSWORD)
            finally:
                db.close()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL.')


@app.get('/')
def root():
    return {'status': 'Student Portal API Running'}


app.include_router(auth_routes.router, prefix='/auth')
app.include_router(student_routes.router, prefix='/students')
