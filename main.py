import time
from datetime import datetime, timezone

from flask import Blueprint, abort, current_app, jsonify, make_response, request
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from securesuite import base32, otp
from securesuite.errors import OTPError, ProvisioningUnavailable
from securesuite.provisioning import provision, qr_code_data_url
from securesuite.uri import parse_uri

from db import Account, get_store
from schemas import ParseUriRequest, SecretRequest, SetupRequest, VerifyRequest

api = Blueprint('api', __name__, url_prefix='/api')

# error returned for unexpected failures, per endpoint
FAILURE_MESSAGES = {
    'api.setup':           "Failed to generate QR code",
    'api.verify':          "Verification failed",
    'api.generate_token':  "Failed to generate token",
    'api.validate_secret': "Validation failed",
    'api.parse':           "Failed to parse URI",
}


def load(schema, data=None):
    """Validate the request body (or ``data``) against ``schema``, 400 on failure."""
    if data is None:
        data = request.get_json(silent=True) or {}
    try:
        return schema.model_validate(data)
    except ValidationError:
        abort(make_response(jsonify(error=schema.error_message), 400))


@api.errorhandler(ProvisioningUnavailable)
def provisioning_unavailable(e):
    current_app.logger.error("Provisioning unavailable: %s", e)
    return jsonify(error="Secure random source unavailable"), 503


@api.errorhandler(OTPError)
def otp_error(e):
    return jsonify(error=str(e)), 400


@api.errorhandler(Exception)
def unexpected_error(e):
    if isinstance(e, HTTPException):
        return e
    current_app.logger.exception("Error in %s", request.endpoint)
    return jsonify(error=FAILURE_MESSAGES.get(request.endpoint, "Internal server error")), 500


@api.route('/setup', methods=['POST'])
def setup():
    """Generate a new secret and QR code for 2FA setup."""
    body   = load(SetupRequest)
    config = current_app.config
    issuer = config['OTP_ISSUER']
    label  = body.name or body.email

    provisioned = provision(label, issuer, config['OTP_STEP'], config['OTP_DIGITS'])
    qr_code     = qr_code_data_url(provisioned.uri)

    get_store().put(body.email, Account(label, issuer, provisioned.secret))
    current_app.logger.info("Provisioned authenticator for %s", body.email)

    return jsonify(qrCode=qr_code, manualKey=provisioned.secret, otpauth_url=provisioned.uri)


@api.route('/verify', methods=['POST'])
def verify():
    body   = load(VerifyRequest)
    config = current_app.config

    verified = otp.verify(
        body.secret, body.token,
        window=config['OTP_VERIFY_WINDOW'], step=config['OTP_STEP'], digits=config['OTP_DIGITS'],
    )

    if verified and body.email:
        store   = get_store()
        account = store.get(body.email)
        # only the secret stored for this account can verify it
        if account is not None and otp.strings_equal(account.secret, base32.normalize_secret(body.secret)):
            account.verified = True
            store.put(body.email, account)
        elif account is not None:
            current_app.logger.warning("Token for %s matched a secret other than the enrolled one", body.email)
    if not verified:
        current_app.logger.info("Rejected token%s", f" for {body.email}" if body.email else "")

    return jsonify(verified=verified, message="Token is valid" if verified else "Invalid token")


@api.route('/generate-token', methods=['POST'])
def generate_token():
    """Current code for a secret, for testing an enrolment."""
    body   = load(SecretRequest)
    config = current_app.config
    now    = int(time.time())

    token = otp.totp(body.secret, now, config['OTP_STEP'], config['OTP_DIGITS'])
    return jsonify(token=token, timeRemaining=otp.time_remaining(now, config['OTP_STEP']))


@api.route('/validate-secret', methods=['GET'])
def validate_secret():
    body     = load(SecretRequest, request.args.to_dict())
    is_valid = base32.is_valid_secret(body.secret)
    return jsonify(valid=is_valid, message="Secret is valid" if is_valid else "Invalid secret format")


@api.route('/parse-uri', methods=['POST'], endpoint='parse')
def parse():
    """Read secret, issuer and label out of text decoded from a QR code."""
    body = load(ParseUriRequest)
    return jsonify(parse_uri(body.text)._asdict())


@api.route('/health')
def health():
    return jsonify(
        status="OK",
        message="Authenticator API is running",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


if __name__ == '__main__':
    from app import app
    app.run(port=app.config['PORT'], debug=True)
