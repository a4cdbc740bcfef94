import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='AccessToken',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('token_digest', models.CharField(help_text='SHA256 hex digest of the bearer token', max_length=64, unique=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, help_text='Token issue time')),
                ('expires_at', models.DateTimeField(db_index=True, help_text='Token is rejected after this moment')),
                ('last_used_at', models.DateTimeField(blank=True, help_text='Last authenticated request', null=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='access_tokens', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Access Token',
                'verbose_name_plural': 'Access Tokens',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['user', '-created_at'], name='identity_user_created_idx')],
            },
        ),
    ]
