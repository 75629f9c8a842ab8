import json
import logging
import os

from flask import Flask, request

from integral_explorer.tutor import (
    tutor_analyze,
    tutor_engine_info,
    tutor_examples,
    tutor_hint,
    tutor_latex,
    tutor_step,
    tutor_submit,
    tutor_validate,
)

app = Flask(__name__)

logger = logging.getLogger(__name__)


def _respond(result_json):
    """Send a tutor JSON string as-is; ok=false becomes a 400."""
    ok = json.loads(result_json).get('ok', False)
    return app.response_class(result_json, status=200 if ok else 400,
                              mimetype='application/json')


def _error(message):
    return _respond(json.dumps({'ok': False, 'error': message}))


def _payload():
    content = request.get_json(silent=True)
    return content if isinstance(content, dict) else None


@app.route('/api/info')
def info():
    return _respond(tutor_engine_info())


@app.route('/api/examples')
def examples():
    return _respond(tutor_examples())


@app.route('/api/analyze', methods=['POST'])
def analyze():
    content = _payload()
    if content is None:
        return _error('Expected a JSON object')
    return _respond(tutor_analyze(content.get('function', '')))


@app.route('/api/validate', methods=['POST'])
def validate():
    content = _payload()
    if content is None:
        return _error('Expected a JSON object')
    return _respond(tutor_validate(
        content.get('answer', ''),
        content.get('correct_answer', ''),
        content.get('attempt', 1),
    ))


@app.route('/api/submit', methods=['POST'])
def submit():
    content = _payload()
    if content is None:
        return _error('Expected a JSON object')
    return _respond(tutor_submit(
        content.get('function', ''),
        content.get('answer', ''),
        content.get('attempt', 1),
        content.get('progress', 0),
    ))


@app.route('/api/hints', methods=['POST'])
def hints():
    content = _payload()
    if content is None:
        return _error('Expected a JSON object')
    return _respond(tutor_hint(
        content.get('technique', ''),
        content.get('revealed', 0),
        content.get('progress', 0),
    ))


@app.route('/api/steps', methods=['POST'])
def steps():
    content = _payload()
    if content is None:
        return _error('Expected a JSON object')
    return _respond(tutor_step(content.get('function', ''), content.get('shown', 0)))


@app.route('/api/latex', methods=['POST'])
def preview():
    content = _payload()
    if content is None:
        return _error('Expected a JSON object')
    return _respond(tutor_latex(content.get('text', '')))


if __name__ == '__main__':
    logging.basicConfig(
        level=os.environ.get('LOG_LEVEL', 'WARNING').upper(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    host = os.environ.get('HOST', '0.0.0.0')
    port = int(os.environ.get('PORT', '5000'))
    logger.info('Integral Explorer API on http://%s:%s', host, port)
    app.run(host=host, port=port)
