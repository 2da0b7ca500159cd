"""
URL map for the catalog. Every entity gets the same eight routes:

    GET  /<entity>s, /<entity>       list
    GET  /<entity>/<id>              detail
    GET  /<entity>/create            create form
    POST /<entity>/create            create
    GET  /<entity>/<id>/delete       delete confirmation
    POST /<entity>/<id>/delete       delete
    GET  /<entity>/<id>/update       update form
    POST /<entity>/<id>/update       update
"""

from flask import Blueprint

from controllers import (
    AuthorController,
    BookController,
    BookInstanceController,
    GenreController,
    IndexController,
)
from data_models import CATALOG_PREFIX


def register_entity_routes(blueprint: Blueprint, entity: str, controller):
    rules = [
        (f"/{entity}s", "list", controller.list_all, "GET"),
        (f"/{entity}", "list", controller.list_all, "GET"),
        (f"/{entity}/create", "create_form", controller.create_form, "GET"),
        (f"/{entity}/create", "create", controller.create, "POST"),
        (f"/{entity}/<doc_id>", "detail", controller.detail, "GET"),
        (f"/{entity}/<doc_id>/delete", "delete_form", controller.delete_form, "GET"),
        (f"/{entity}/<doc_id>/delete", "delete", controller.delete, "POST"),
        (f"/{entity}/<doc_id>/update", "update_form", controller.update_form, "GET"),
        (f"/{entity}/<doc_id>/update", "update", controller.update, "POST"),
    ]
    for rule, action, view, method in rules:
        blueprint.add_url_rule(rule, f"{entity}_{action}", view, methods=[method])


def build_catalog_blueprint(store) -> Blueprint:
    """
    Create the controllers around the given store and mount them under /catalog.
    """
    blueprint = Blueprint("catalog", __name__, url_prefix=CATALOG_PREFIX)
    blueprint.add_url_rule("/", "index", IndexController(store).index)

    register_entity_routes(blueprint, "author", AuthorController(store))
    register_entity_routes(blueprint, "book", BookController(store))
    register_entity_routes(blueprint, "genre", GenreController(store))
    register_entity_routes(blueprint, "bookinstance", BookInstanceController(store))
    return blueprint
