import os

from flask import Blueprint, Flask, current_app, flash, redirect, render_template, request, url_for
from flask_migrate import Migrate, upgrade
from loguru import logger
from prometheus_client import CollectorRegistry
from prometheus_flask_exporter import PrometheusMetrics
from prometheus_flask_exporter.multiprocess import GunicornPrometheusMetrics
from werkzeug.exceptions import HTTPException

from errors import ProductAdminError, RateLimited
from forms import parse_positive_int, parse_product_form, parse_product_id
from limiter import TokenBucket
from logs import configure_logging
from models.base import db
from models.product import SortOrder
from models.repository import ProductRepository
from settings import Config

MIGRATIONS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'migrations')

SORT_CHOICES = [
    (SortOrder.DEFAULT, 'Default'),
    (SortOrder.SIZE, 'Size'),
    (SortOrder.PRICE, 'Price'),
    (SortOrder.NAME, 'Name'),
]

bp = Blueprint('products', __name__)


def get_repository():
    return current_app.extensions['product_repository']


def get_limiter():
    return current_app.extensions['rate_limiter']


def redirect_to_index():
    return redirect(url_for('products.index'), code=303)


@bp.route('/')
def index():
    filter_text = request.args.get('filter', '')
    sort = SortOrder.parse(request.args.get('sort'))
    page = parse_positive_int(request.args.get('page'), 1)
    page_size = parse_positive_int(request.args.get('pageSize'), current_app.config['DEFAULT_PAGE_SIZE'])

    if not get_limiter().allow():
        logger.warning("Rate limit exceeded on product list")
        raise RateLimited()

    products = get_repository().list(filter_text, sort, page, page_size)

    return render_template(
        'index.html',
        products=products,
        filter=filter_text,
        sort=sort.value,
        sort_choices=SORT_CHOICES,
        page=page,
        prev_page=page - 1,
        next_page=page + 1,
        page_size=page_size,
    )


@bp.route('/delete/', defaults={'product_id': ''}, methods=['POST'])
@bp.route('/delete/<product_id>', methods=['POST'])
def delete_product(product_id):
    product_id = parse_product_id(product_id)

    if get_repository().delete(product_id):
        logger.info(f"Product deleted with ID: {product_id}")
        flash('Product deleted.', 'success')

    return redirect_to_index()


@bp.route('/add-product')
def add_product():
    return render_template('add_product.html')


@bp.route('/add-product-post', methods=['POST'])
def add_product_post():
    name, size, price = parse_product_form(request.form)

    product = get_repository().create(name, size, price)

    logger.info(f"New product added: ID={product.id}, Name={name}, Size={size}, Price={price}")
    flash(f'{name} added.', 'success')
    return redirect_to_index()


@bp.route('/edit/', defaults={'product_id': ''})
@bp.route('/edit/<product_id>')
def edit_product(product_id):
    product = get_repository().get_by_id(parse_product_id(product_id))
    return render_template('edit_product.html', product=product)


@bp.route('/edit-product-post/', defaults={'product_id': ''}, methods=['POST'])
@bp.route('/edit-product-post/<product_id>', methods=['POST'])
def edit_product_post(product_id):
    product_id = parse_product_id(product_id)
    name, size, price = parse_product_form(request.form)

    get_repository().update(product_id, name, size, price)

    logger.info(f"Product updated with ID: {product_id}")
    flash(f'{name} updated.', 'success')
    return redirect_to_index()


def plain_text(response):
    response.content_type = 'text/plain; charset=utf-8'
    return response


@bp.app_errorhandler(ProductAdminError)
def handle_product_admin_error(error):
    return plain_text(current_app.response_class(error.message, status=error.status_code))


@bp.app_errorhandler(HTTPException)
def handle_http_exception(error):
    response = error.get_response()
    if error.code == 405:
        response.set_data("Method not supported")
    else:
        response.set_data(error.name)
    return plain_text(response)


def init_metrics(app):
    """Request metrics on /metrics.

    Under gunicorn (PROMETHEUS_MULTIPROC_DIR set) the multiprocess collector is
    used; otherwise every app gets its own registry.
    """
    if os.getenv('PROMETHEUS_MULTIPROC_DIR'):
        metrics = GunicornPrometheusMetrics(app)
        metrics.register_endpoint('/metrics')
    else:
        metrics = PrometheusMetrics(app, registry=CollectorRegistry())
    return metrics


def apply_migrations(app):
    """Apply pending migrations."""
    with app.app_context():
        try:
            upgrade(directory=MIGRATIONS_DIR)
        except Exception:
            logger.exception("Error applying migrations")
            raise
        logger.info("Migrations applied successfully.")


def create_app(config=None):
    app = Flask(__name__,
                static_folder='static',
                template_folder='templates')

    app.config.from_object(Config)
    if config:
        app.config.update(config)

    configure_logging(app.config['LOG_LEVEL'], app.config['LOG_JSON'])

    db.init_app(app)
    Migrate(app, db, directory=MIGRATIONS_DIR)

    # Shared collaborators, built once and reached through current_app.extensions.
    app.extensions['product_repository'] = ProductRepository(db)
    app.extensions['rate_limiter'] = TokenBucket(
        rate=app.config['RATE_LIMIT_PER_SECOND'],
        burst=app.config['RATE_LIMIT_BURST'],
    )

    app.register_blueprint(bp)
    app.extensions['metrics'] = init_metrics(app)

    if app.config['AUTO_MIGRATE']:
        apply_migrations(app)

    return app


if __name__ == '__main__':
    app = create_app()
    logger.info(f"Server is running at http://localhost:{app.config['PORT']}")
    app.run(host='0.0.0.0', port=app.config['PORT'], threaded=True)
