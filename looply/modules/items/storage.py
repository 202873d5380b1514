import boto3
from botocore.exceptions import ClientError
from looply.config import settings
from supabase import Client
import logging

logger = logging.getLogger(__name__)


class S3Storage:
    def __init__(self):
        if not settings.s3_configured:
            raise ValueError("AWS S3 credentials and bucket name must be configured")

        self.s3_client = boto3.client(
            's3',
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            region_name=settings.aws_region
        )
        self.bucket_name = settings.s3_bucket_name

    def upload_file(self, file_content: bytes, key: str, content_type: str = "image/jpeg") -> str:
        """Upload an image to S3 and return its public URL"""
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=file_content,
                ContentType=content_type
            )
            return f"https://{self.bucket_name}.s3.{settings.aws_region}.amazonaws.com/{key}"
        except ClientError as e:
            logger.error(f"Failed to upload file to S3: {str(e)}")
            raise


class SupabaseImageStorage:
    """Listing images in a public Supabase Storage bucket."""

    def __init__(self, supabase: Client, bucket_name: str = None):
        self.supabase = supabase
        self.bucket_name = bucket_name or settings.storage_bucket

    def upload_file(self, file_content: bytes, key: str, content_type: str = "image/jpeg") -> str:
        bucket = self.supabase.storage.from_(self.bucket_name)
        bucket.upload(key, file_content, file_options={"content-type": content_type})
        return bucket.get_public_url(key)


def get_image_storage(supabase: Client):
    """S3 when AWS settings are complete, otherwise the Supabase Storage bucket"""
    if settings.s3_configured:
        try:
            return S3Storage()
        except Exception as e:
            logger.warning(f"S3 storage initialization failed ({str(e)}), will use Supabase Storage")
    return SupabaseImageStorage(supabase)
