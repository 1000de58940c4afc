import uuid
from django.conf import settings
from django.utils import timezone

from .constants import PAYMENT_PROOF_MIME_TYPES
from .exceptions import BoostValidationError


class PaymentProofStorage:
    def __init__(self, bucket_name=None):
        # imported lazily so the engine runs without GCS credentials
        from google.cloud import storage

        self.client = storage.Client()
        self.bucket_name = bucket_name or settings.BOOST_PROOF_BUCKET

    @staticmethod
    def validate(uploaded_file):
        content_type = (getattr(uploaded_file, 'content_type', '') or '').lower()
        if content_type not in PAYMENT_PROOF_MIME_TYPES:
            raise BoostValidationError("Payment proof must be an image (jpeg, png, webp, heic, heif, avif).")
        return content_type

    def upload_payment_proof(self, uploaded_file, seller_id):
        """Store the proof image; returns the reference recorded on the request."""
        content_type = self.validate(uploaded_file)
        blob_name = f"boost_payment_proofs/seller_{seller_id}/{uuid.uuid4().hex}"
        blob = self.client.bucket(self.bucket_name).blob(blob_name)
        blob.upload_from_file(uploaded_file, content_type=content_type)

        return {
            'payment_proof_url': f"https://storage.googleapis.com/{self.bucket_name}/{blob_name}",
            'payment_proof_path': blob_name,
            'payment_proof_mime_type': content_type,
            'payment_proof_size': getattr(uploaded_file, 'size', 0) or 0,
            'payment_proof_uploaded_at': timezone.now(),
        }
