"""
Shopping gateway - HTTP front door for task images and task records.

Forwards uploads to an S3 bucket, task records to a DynamoDB table, and
task-created events to an SQS queue and an SNS topic.
"""

__version__ = "0.1.0"
