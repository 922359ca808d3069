"""
regasm Web API - Flask Backend

JSON endpoints that assemble and run programs submitted as text.
"""

import os

from flask import Flask, jsonify, request

from .assembler import Assembler
from .errors import AssemblerError, ExecutionError
from .machine import Machine


app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = 1024 * 1024  # 1MB max program
app.config['DEBUG'] = os.environ.get('FLASK_DEBUG', 'false').lower() == 'true'
app.config['MAX_STEPS'] = int(os.environ.get('REGASM_MAX_STEPS', 100_000))


def error_response(error: str, message: str, status: int = 400, line=None) -> tuple:
    """Create a standardized error response."""
    return jsonify({'error': error, 'message': message, 'line': line}), status


def read_request() -> tuple:
    """Get (source, strict) from the JSON body, or raise ValueError."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict) or not isinstance(body.get('source'), str):
        raise ValueError("Request body must be a JSON object with a 'source' string")
    return body['source'], bool(body.get('strict', False))


def program_summary(program) -> dict:
    """Render a Program as JSON-friendly strings."""
    return {
        'instructions': [str(instr) for instr in program.instructions],
        'functions': {
            name: [str(instr) for instr in block.instructions]
            for name, block in program.functions.items()
        },
    }


@app.after_request
def add_cors_headers(response):
    """Add CORS headers to all responses for local development."""
    response.headers['Access-Control-Allow-Origin'] = '*'
    response.headers['Access-Control-Allow-Methods'] = 'GET, POST, OPTIONS'
    response.headers['Access-Control-Allow-Headers'] = 'Content-Type'
    return response


@app.errorhandler(404)
def not_found(error):
    return error_response('Not found', str(error.description), 404)


@app.route('/api/assemble', methods=['POST', 'OPTIONS'])
def assemble_program():
    """Assemble a program and return its instructions."""
    if request.method == 'OPTIONS':
        return '', 204

    try:
        source, strict = read_request()
    except ValueError as e:
        return error_response('Bad request', str(e))

    try:
        program = Assembler(strict=strict).assemble_string(source)
    except AssemblerError as e:
        return error_response('Assembly failed', e.detail, line=e.line_num)

    return jsonify({'success': True, **program_summary(program)})


@app.route('/api/run', methods=['POST', 'OPTIONS'])
def run_program():
    """Assemble and execute a program, returning the final machine state."""
    if request.method == 'OPTIONS':
        return '', 204

    try:
        source, strict = read_request()
    except ValueError as e:
        return error_response('Bad request', str(e))

    try:
        program = Assembler(strict=strict).assemble_string(source)
    except AssemblerError as e:
        return error_response('Assembly failed', e.detail, line=e.line_num)

    machine = Machine(program)
    try:
        machine.run(max_steps=app.config['MAX_STEPS'])
    except ExecutionError as e:
        return jsonify({
            'error': 'Execution failed',
            'message': e.detail,
            'ip': e.ip,
            'output': machine.output,
            'registers': machine.dump_registers(),
        }), 400

    return jsonify({
        'success': True,
        'output': machine.output,
        'registers': machine.dump_registers(),
        'steps': machine.steps,
        'comparison': machine.comparison.value if machine.comparison else None,
    })


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5050))
    debug = os.environ.get('FLASK_DEBUG', 'false').lower() == 'true'

    print(f"Starting regasm API on port {port}")
    app.run(host='0.0.0.0', port=port, debug=debug)
