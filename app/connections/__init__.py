from app.connections.mongo import mongo_lifespan, init_mongo, close_mongo
from app.connections.context import AppContext, build_context, get_context
