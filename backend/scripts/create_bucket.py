#!/usr/bin/env python
"""Create the document bucket and make its objects publicly readable.

Submission review links point straight at the stored objects, so the bucket
needs an anonymous s3:GetObject policy. Safe to run repeatedly.

Usage:
    python backend/scripts/create_bucket.py

Environment Variables:
    S3_ENDPOINT_URL: S3-compatible endpoint (default: http://localhost:9000)
    S3_ACCESS_KEY_ID / S3_SECRET_ACCESS_KEY: Credentials
    S3_BUCKET_NAME: Bucket to create (default: customer-documents)
    S3_REGION: Region (default: us-east-1)
"""

import json
import sys

import boto3
from botocore.exceptions import ClientError

from intake_portal.infrastructure.storage import load_storage_config


def public_read_policy(bucket_name: str) -> dict:
    """Bucket policy granting anonymous read on every object."""
    return {
        "Version": "2012-10-17",
        "Statement": [
            {
                "Sid": "PublicReadGetObject",
                "Effect": "Allow",
                "Principal": "*",
                "Action": ["s3:GetObject"],
                "Resource": [f"arn:aws:s3:::{bucket_name}/*"],
            }
        ],
    }


def main():
    """Create the bucket if missing and apply the public-read policy."""
    try:
        config = load_storage_config()
    except ValueError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    client = boto3.client(
        "s3",
        endpoint_url=config.endpoint_url,
        aws_access_key_id=config.access_key,
        aws_secret_access_key=config.secret_key,
        region_name=config.region,
    )

    try:
        client.head_bucket(Bucket=config.bucket_name)
        print(f"Bucket {config.bucket_name} already exists")
    except ClientError:
        params = {"Bucket": config.bucket_name}
        if config.region and config.region != "us-east-1":
            params["CreateBucketConfiguration"] = {"LocationConstraint": config.region}
        client.create_bucket(**params)
        print(f"Created bucket {config.bucket_name}")

    try:
        client.put_bucket_policy(
            Bucket=config.bucket_name,
            Policy=json.dumps(public_read_policy(config.bucket_name)),
        )
    except ClientError as e:
        print(f"ERROR: Could not apply bucket policy: {e}")
        sys.exit(1)

    print(f"Applied public-read policy to {config.bucket_name}")


if __name__ == "__main__":
    main()
