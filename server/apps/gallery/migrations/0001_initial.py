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
            name='Folder',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('parent_folder', models.ForeignKey(blank=True, help_text='Containing folder, empty for root', null=True, on_delete=django.db.models.deletion.RESTRICT, related_name='children', to='gallery.folder')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='folders', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Folder',
                'verbose_name_plural': 'Folders',
                'ordering': ['name', 'id'],
                'indexes': [models.Index(fields=['user', 'parent_folder'], name='gallery_folder_parent_idx')],
            },
        ),
        migrations.CreateModel(
            name='Image',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text='Display name, searchable', max_length=255)),
                ('storage_key', models.CharField(help_text='Key in storage: {user_id}/{folder_id|root}/{uuid}-{file}', max_length=1024, unique=True)),
                ('url', models.URLField(help_text='Public URL of the blob', max_length=2048)),
                ('content_type', models.CharField(max_length=255)),
                ('size_bytes', models.BigIntegerField(help_text='Blob size in bytes')),
                ('checksum_sha256', models.CharField(help_text='SHA256 hash for integrity verification', max_length=64)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('folder', models.ForeignKey(blank=True, help_text='Containing folder, empty for root', null=True, on_delete=django.db.models.deletion.RESTRICT, related_name='images', to='gallery.folder')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='images', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Image',
                'verbose_name_plural': 'Images',
                'ordering': ['-created_at', '-id'],
                'indexes': [models.Index(fields=['user', 'folder'], name='gallery_image_folder_idx')],
            },
        ),
    ]
