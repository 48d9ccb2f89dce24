# Generated manually for the plant room, asset and task models

import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='PlantRoom',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, help_text='UUID primary key', primary_key=True, serialize=False, verbose_name='id')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='creation date')),
                ('last_modified_at', models.DateTimeField(auto_now=True, verbose_name='last modified date')),
                ('plant_room_id', models.CharField(help_text='External plant room identifier used by assets', max_length=50, unique=True, verbose_name='plant room id')),
                ('block', models.CharField(help_text='Block or building the plant room belongs to', max_length=200, verbose_name='block')),
                ('address', models.CharField(blank=True, max_length=255, verbose_name='address')),
                ('postcode', models.CharField(blank=True, max_length=20, verbose_name='postcode')),
                ('plant_room_type', models.CharField(choices=[('Domestic', 'Domestic'), ('Non-Domestic', 'Non-Domestic'), ('Commercial', 'Commercial'), ('Other', 'Other')], default='Other', max_length=20, verbose_name='plant room type')),
                ('lgsr_date', models.DateField(blank=True, help_text='Date of the last Landlord Gas Safety Record inspection', null=True, verbose_name='LGSR date')),
            ],
            options={
                'verbose_name': 'plant room',
                'verbose_name_plural': 'plant rooms',
                'ordering': ['plant_room_id'],
            },
        ),
        migrations.CreateModel(
            name='Asset',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, help_text='UUID primary key', primary_key=True, serialize=False, verbose_name='id')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='creation date')),
                ('last_modified_at', models.DateTimeField(auto_now=True, verbose_name='last modified date')),
                ('asset_id', models.CharField(help_text='External asset identifier', max_length=50, unique=True, verbose_name='asset id')),
                ('asset_name', models.CharField(max_length=200, verbose_name='asset name')),
                ('asset_type', models.CharField(blank=True, max_length=100, verbose_name='asset type')),
                ('plant_room_ref', models.CharField(blank=True, db_index=True, help_text='External identifier of the plant room housing this asset', max_length=50, verbose_name='plant room id')),
                ('operational', models.BooleanField(default=True, verbose_name='operational')),
                ('frequency', models.CharField(default='monthly', help_text='Service interval label, e.g. weekly or quarterly', max_length=20, verbose_name='maintenance frequency')),
                ('last_service_date', models.DateField(blank=True, null=True, verbose_name='last service date')),
                ('manufacturer', models.CharField(blank=True, max_length=200)),
                ('model_number', models.CharField(blank=True, max_length=200)),
                ('serial_number', models.CharField(blank=True, max_length=200)),
                ('install_date', models.DateField(blank=True, null=True)),
            ],
            options={
                'verbose_name': 'asset',
                'verbose_name_plural': 'assets',
                'ordering': ['asset_id'],
                'indexes': [
                    models.Index(fields=['operational'], name='asset_operational_idx'),
                    models.Index(fields=['last_service_date'], name='asset_last_service_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='TeamMember',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, help_text='UUID primary key', primary_key=True, serialize=False, verbose_name='id')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='creation date')),
                ('last_modified_at', models.DateTimeField(auto_now=True, verbose_name='last modified date')),
                ('engineer_id', models.CharField(max_length=50, unique=True, verbose_name='engineer id')),
                ('name', models.CharField(max_length=200, verbose_name='name')),
                ('email', models.EmailField(max_length=254, verbose_name='email')),
                ('phone_number', models.CharField(blank=True, max_length=30, verbose_name='phone number')),
                ('role', models.CharField(choices=[('Engineer', 'Engineer'), ('Supervisor', 'Supervisor'), ('Admin', 'Admin')], default='Engineer', max_length=20, verbose_name='role')),
                ('skills', models.JSONField(blank=True, default=list, verbose_name='skills')),
                ('user', models.OneToOneField(blank=True, help_text='Login account of this team member', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='team_member', to=settings.AUTH_USER_MODEL, verbose_name='user')),
            ],
            options={
                'verbose_name': 'team member',
                'verbose_name_plural': 'team members',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='MaintenanceTask',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, help_text='UUID primary key', primary_key=True, serialize=False, verbose_name='id')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='creation date')),
                ('last_modified_at', models.DateTimeField(auto_now=True, verbose_name='last modified date')),
                ('task_id', models.CharField(help_text='System generated task reference', max_length=120, unique=True, verbose_name='task id')),
                ('due_date', models.DateField(verbose_name='due date')),
                ('task_type', models.CharField(default='General', max_length=50, verbose_name='type of task')),
                ('status', models.CharField(choices=[('Open', 'Open'), ('In Progress', 'In Progress'), ('Completed', 'Completed'), ('Awaiting Parts', 'Awaiting Parts'), ('Parts Required', 'Parts Required'), ('On Hold', 'On Hold'), ('Requires Follow-up', 'Requires Follow-up')], default='Open', max_length=30, verbose_name='status')),
                ('priority', models.CharField(choices=[('Low', 'Low'), ('Medium', 'Medium'), ('High', 'High')], default='Medium', max_length=10, verbose_name='priority')),
                ('notes', models.TextField(blank=True, verbose_name='notes')),
                ('date_completed', models.DateField(blank=True, null=True, verbose_name='date completed')),
                ('asset', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='tasks', to='common.asset', verbose_name='asset')),
                ('assigned_to', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='assigned_tasks', to='common.teammember', verbose_name='assigned to')),
                ('plant_room', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='tasks', to='common.plantroom', verbose_name='plant room')),
            ],
            options={
                'verbose_name': 'maintenance task',
                'verbose_name_plural': 'maintenance tasks',
                'ordering': ['due_date'],
                'indexes': [
                    models.Index(fields=['status'], name='task_status_idx'),
                    models.Index(fields=['due_date'], name='task_due_date_idx'),
                    models.Index(fields=['task_type'], name='task_type_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(('task_type', 'PPM')), fields=('asset', 'due_date'), name='unique_ppm_task_per_asset_due_date'),
                ],
            },
        ),
        migrations.CreateModel(
            name='PlantRoomLog',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, help_text='UUID primary key', primary_key=True, serialize=False, verbose_name='id')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='creation date')),
                ('last_modified_at', models.DateTimeField(auto_now=True, verbose_name='last modified date')),
                ('log_id', models.CharField(max_length=100, unique=True, verbose_name='log id')),
                ('date', models.DateField(default=django.utils.timezone.localdate, verbose_name='date')),
                ('time', models.TimeField(blank=True, null=True, verbose_name='time')),
                ('user_email', models.EmailField(max_length=254, verbose_name='user email')),
                ('log_entry', models.TextField(verbose_name='log entry')),
                ('status', models.CharField(choices=[('OK', 'OK'), ('Issue Found', 'Issue Found'), ('Follow-up Raised', 'Follow-up Raised')], default='OK', max_length=20, verbose_name='status')),
                ('comments', models.TextField(blank=True, verbose_name='comments')),
                ('plant_room', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='logs', to='common.plantroom', verbose_name='plant room')),
            ],
            options={
                'verbose_name': 'plant room log',
                'verbose_name_plural': 'plant room logs',
                'ordering': ['-date', '-created_at'],
            },
        ),
        migrations.CreateModel(
            name='PartsRequest',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, help_text='UUID primary key', primary_key=True, serialize=False, verbose_name='id')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='creation date')),
                ('last_modified_at', models.DateTimeField(auto_now=True, verbose_name='last modified date')),
                ('part_name', models.CharField(max_length=200, verbose_name='part name')),
                ('part_number', models.CharField(blank=True, max_length=100, verbose_name='part number')),
                ('quantity', models.PositiveIntegerField(default=1, verbose_name='quantity')),
                ('urgency', models.CharField(choices=[('Low', 'Low'), ('Medium', 'Medium'), ('High', 'High'), ('Critical', 'Critical')], default='Medium', max_length=10, verbose_name='urgency')),
                ('status', models.CharField(choices=[('Requested', 'Requested'), ('Ordered', 'Ordered'), ('Received', 'Received'), ('Installed', 'Installed')], default='Requested', max_length=20, verbose_name='status')),
                ('received_date', models.DateField(blank=True, null=True)),
                ('installed_date', models.DateField(blank=True, null=True)),
                ('corrective_task', models.ForeignKey(blank=True, help_text='Installation task raised when the parts arrived', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='installation_parts_requests', to='common.maintenancetask', verbose_name='corrective task')),
                ('task', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='parts_requests', to='common.maintenancetask', verbose_name='task')),
            ],
            options={
                'verbose_name': 'parts request',
                'verbose_name_plural': 'parts requests',
                'ordering': ['-created_at'],
            },
        ),
    ]
