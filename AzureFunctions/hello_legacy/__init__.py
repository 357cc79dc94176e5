import azure.functions as func
import logging

from shared.helpers import resolve_name


def main(req: func.HttpRequest) -> func.HttpResponse:
    logging.info("Python HTTP trigger function processed a request.")
    name = resolve_name(req)["name"]
    return func.HttpResponse(f"Hello, {name}!", status_code=200)
