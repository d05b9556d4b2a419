import os
import uuid
from werkzeug.utils import secure_filename
from flask import current_app

ALLOWED_PACKAGE_EXTENSIONS = {'zip', 'tgz', 'gz', 'tar', 'js', 'json'}
PACKAGE_URL_SEGMENT = "packages"

def allowed_package(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_PACKAGE_EXTENSIONS

def _url_prefix():
    base_url = current_app.config.get('PACKAGE_BASE_URL', '').rstrip('/')
    return f"{base_url}/{PACKAGE_URL_SEGMENT}/"

def save_package(file, *, block_id, version):
    """
    Store an uploaded package and return (url, size_in_bytes).
    """
    if not file or not file.filename:
        raise ValueError("Package file is required")
    if not allowed_package(file.filename):
        raise ValueError("Package type not allowed")

    filename = secure_filename(file.filename)
    ext = filename.rsplit('.', 1)[1].lower()
    unique_filename = f"{secure_filename(version)}-{uuid.uuid4().hex}.{ext}"

    upload_folder = os.path.join(current_app.config.get('UPLOAD_FOLDER', 'uploads/packages'), block_id)
    os.makedirs(upload_folder, exist_ok=True)
    file_path = os.path.join(upload_folder, unique_filename)

    file.save(file_path)
    size = os.path.getsize(file_path)

    return f"{_url_prefix()}{block_id}/{unique_filename}", size


def delete_package(package_url):
    """
    Deletes a stored package given the URL save_package returned.
    URLs this service did not issue are left alone.
    """
    prefix = _url_prefix()
    if not package_url or not package_url.startswith(prefix):
        return False

    relative = package_url[len(prefix):]
    file_path = os.path.join(current_app.config.get('UPLOAD_FOLDER', 'uploads/packages'), *relative.split('/'))

    if os.path.exists(file_path):
        try:
            os.remove(file_path)
            return True
        except OSError as e:
            current_app.logger.error(f"Failed to delete package {file_path}: {e}")
            return False
    return False
