from flask import Blueprint, render_template, request, jsonify, redirect, session, abort, current_app
from .models import Technician
from .auth import role_required, current_role
from .nav_access import ADMIN, TECHNICIAN, NavigationError

main = Blueprint('main', __name__)

_PAGE_TITLES = {
    'dashboard': 'Dashboard',
    'tech_dashboard': 'Tech Dashboard',
    'jobs': 'Jobs',
    'parts': 'Parts Inventory',
    'analytics': 'Analytics',
    'appliances': 'Appliances',
    'clients': 'Clients',
    'payout': 'Payout',
}


def _policy():
    return current_app.extensions['nav_policy']


def _dev_sign_in_enabled() -> bool:
    return bool(current_app.debug or current_app.testing or current_app.config.get('DEV_SIGN_IN'))


def _render_page(key: str):
    return render_template('page.html', page_title=_PAGE_TITLES[key])


@main.route('/')
def index():
    role = current_role()
    if role:
        try:
            return redirect(_policy().landing_path(role))
        except NavigationError as e:
            current_app.logger.warning("No landing page for role %r: %s", role, e)
    return render_template('login.html', dev_sign_in=_dev_sign_in_enabled())


# Development sign-in: picks an existing technicians row by email.
# Only served in debug/testing or with DEV_SIGN_IN set.
@main.route('/session', methods=['POST'])
def sign_in():
    if not _dev_sign_in_enabled():
        abort(404)
    payload = request.get_json(silent=True) or request.form
    email = (payload.get('email') or '').strip().lower()
    if not email:
        abort(400)
    tech = Technician.query.filter_by(email=email).first()
    if tech is None:
        abort(404)
    role = (tech.role or TECHNICIAN).strip().lower()
    session['user'] = {'email': tech.email, 'name': tech.name, 'user_type': role}
    current_app.logger.info("Signed in %s as %s", tech.email, role)
    try:
        return redirect(_policy().landing_path(role))
    except NavigationError:
        current_app.logger.warning("Technician %s has unsupported role %r", tech.email, role)
        return redirect('/')


@main.route('/session/clear', methods=['POST'])
def sign_out():
    session.clear()
    return redirect('/')


@main.route('/dashboard')
@role_required(ADMIN)
def dashboard():
    return _render_page('dashboard')


@main.route('/tech-dashboard')
@role_required(ADMIN, TECHNICIAN)
def tech_dashboard():
    if current_role() == ADMIN:
        return redirect(_policy().landing_path(ADMIN))
    return _render_page('tech_dashboard')


@main.route('/jobs')
@role_required()
def jobs():
    return _render_page('jobs')


@main.route('/parts')
@role_required()
def parts():
    return _render_page('parts')


@main.route('/analytics')
@role_required(ADMIN)
def analytics():
    return _render_page('analytics')


@main.route('/appliances')
@role_required()
def appliances():
    return _render_page('appliances')


@main.route('/clients')
@role_required(ADMIN)
def clients():
    return _render_page('clients')


@main.route('/payout')
@role_required()
def payout():
    return _render_page('payout')


@main.route('/api/nav')
def api_nav():
    role = request.args.get('role') or current_role()
    path = request.args.get('path', '/')
    policy = _policy()
    try:
        state = policy.navigation_state(role, path)
    except (NavigationError, ValueError) as e:
        return jsonify({'error': str(e)}), 400
    return jsonify(state.to_dict())
