import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

BASE_STATUS = [('ACTIVE', 'Active'), ('INACTIVE', 'Inactive'), ('PENDING', 'Pending'), ('ARCHIVED', 'Archived'), ('DELETED', 'Deleted')]
CONTACT_METHOD = [('EMAIL', 'Email'), ('PHONE', 'Phone'), ('SMS', 'Sms'), ('WHATSAPP', 'Whatsapp'), ('OTHER', 'Other')]
WORK_STATUS = [('ACTIVE', 'Active'), ('INACTIVE', 'Inactive'), ('ON_LEAVE', 'On Leave'), ('TERMINATED', 'Terminated'), ('SUSPENDED', 'Suspended'), ('RESIGNED', 'Resigned')]
LANGUAGE = [('ENGLISH', 'English'), ('SPANISH', 'Spanish'), ('FRENCH', 'French'), ('GERMAN', 'German'), ('OTHER', 'Other')]


def soft_delete_fields():
    return [
        ('metadata', models.JSONField(blank=True, default=dict)),
        ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
        ('updated_at', models.DateTimeField(auto_now=True)),
        ('deleted_at', models.DateTimeField(blank=True, db_index=True, null=True)),
    ]


def catalog_fields():
    return [
        ('name', models.CharField(max_length=255)),
        ('description', models.TextField(blank=True, null=True)),
        ('status', models.CharField(choices=BASE_STATUS, db_index=True, default='ACTIVE', max_length=16)),
        ('duration', models.PositiveIntegerField(blank=True, help_text='Minutes', null=True)),
        ('capacity', models.PositiveIntegerField(blank=True, null=True)),
        ('prerequisites', models.TextField(blank=True, null=True)),
        ('is_public', models.BooleanField(default=True)),
        ('price', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Industry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *soft_delete_fields(),
                ('name', models.CharField(max_length=255)),
                ('code', models.CharField(blank=True, max_length=32, null=True, unique=True)),
                ('description', models.TextField(blank=True, null=True)),
                ('external_id', models.CharField(blank=True, max_length=64, null=True)),
                ('parent', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='children', to='core.industry')),
            ],
            options={
                'verbose_name_plural': 'industries',
                'ordering': ['name'],
                'constraints': [models.UniqueConstraint(condition=models.Q(('deleted_at__isnull', True)), fields=('name',), name='uniq_live_industry_name')],
            },
        ),
        migrations.CreateModel(
            name='Client',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *soft_delete_fields(),
                ('name', models.CharField(max_length=255)),
                ('email', models.EmailField(blank=True, db_index=True, max_length=254, null=True)),
                ('phone', models.CharField(blank=True, max_length=32, null=True)),
                ('website', models.URLField(blank=True, null=True)),
                ('address', models.TextField(blank=True, null=True)),
                ('billing_address', models.TextField(blank=True, null=True)),
                ('tax_id', models.CharField(blank=True, db_index=True, max_length=64, null=True)),
                ('contact_person', models.CharField(blank=True, max_length=255, null=True)),
                ('contact_email', models.EmailField(blank=True, max_length=254, null=True)),
                ('contact_phone', models.CharField(blank=True, max_length=32, null=True)),
                ('status', models.CharField(choices=BASE_STATUS, db_index=True, default='ACTIVE', max_length=16)),
                ('preferred_contact_method', models.CharField(blank=True, choices=CONTACT_METHOD, max_length=16, null=True)),
                ('timezone', models.CharField(blank=True, max_length=64, null=True)),
                ('is_verified', models.BooleanField(db_index=True, default=False)),
                ('notes', models.TextField(blank=True, null=True)),
                ('industry', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='clients', to='core.industry')),
            ],
        ),
        migrations.CreateModel(
            name='Profile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('metadata', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('full_name', models.CharField(max_length=255)),
                ('preferred_name', models.CharField(blank=True, max_length=255, null=True)),
                ('email', models.EmailField(blank=True, db_index=True, max_length=254, null=True)),
                ('phone', models.CharField(blank=True, max_length=32, null=True)),
                ('dob', models.DateField(blank=True, null=True)),
                ('gender', models.CharField(blank=True, max_length=16, null=True)),
                ('nationality', models.CharField(blank=True, max_length=64, null=True)),
                ('address', models.TextField(blank=True, null=True)),
                ('emergency_contact_name', models.CharField(blank=True, max_length=255, null=True)),
                ('emergency_contact_phone', models.CharField(blank=True, max_length=32, null=True)),
                ('emergency_contact_email', models.EmailField(blank=True, max_length=254, null=True)),
                ('preferred_language', models.CharField(blank=True, choices=LANGUAGE, max_length=16, null=True)),
                ('preferred_contact_method', models.CharField(blank=True, choices=CONTACT_METHOD, max_length=16, null=True)),
            ],
            options={
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='Staff',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *soft_delete_fields(),
                ('job_title', models.CharField(blank=True, default='', max_length=255)),
                ('company_staff_id', models.CharField(blank=True, max_length=64, null=True)),
                ('management_level', models.CharField(choices=[('JUNIOR', 'Junior'), ('MID', 'Mid'), ('SENIOR', 'Senior'), ('EXECUTIVE', 'Executive'), ('OTHER', 'Other')], default='OTHER', max_length=16)),
                ('employment_type', models.CharField(blank=True, choices=[('FULL_TIME', 'Full Time'), ('PART_TIME', 'Part Time'), ('CONTRACT', 'Contract'), ('TEMPORARY', 'Temporary'), ('CONSULTANT', 'Consultant')], max_length=16, null=True)),
                ('education_level', models.CharField(blank=True, choices=[('HIGH_SCHOOL', 'High School'), ('DIPLOMA', 'Diploma'), ('BACHELORS', 'Bachelors'), ('MASTERS', 'Masters'), ('PHD', 'Phd')], max_length=16, null=True)),
                ('marital_status', models.CharField(blank=True, choices=[('SINGLE', 'Single'), ('MARRIED', 'Married'), ('DIVORCED', 'Divorced'), ('WIDOWED', 'Widowed')], max_length=16, null=True)),
                ('start_date', models.DateField(blank=True, null=True)),
                ('end_date', models.DateField(blank=True, null=True)),
                ('status', models.CharField(choices=WORK_STATUS, db_index=True, default='ACTIVE', max_length=16)),
                ('qualifications', models.JSONField(blank=True, default=list)),
                ('specializations', models.JSONField(blank=True, default=list)),
                ('client', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='staff', to='core.client')),
                ('profile', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='staff_roles', to='core.profile')),
            ],
            options={
                'verbose_name_plural': 'staff',
                'constraints': [models.UniqueConstraint(condition=models.Q(('deleted_at__isnull', True)), fields=('client', 'profile'), name='uniq_live_staff_per_client')],
            },
        ),
        migrations.CreateModel(
            name='Beneficiary',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *soft_delete_fields(),
                ('relation', models.CharField(choices=[('CHILD', 'Child'), ('SPOUSE', 'Spouse'), ('PARENT', 'Parent'), ('SIBLING', 'Sibling'), ('GRANDPARENT', 'Grandparent'), ('GUARDIAN', 'Guardian'), ('FRIEND', 'Friend'), ('NEIGHBOR', 'Neighbor'), ('COUSIN', 'Cousin'), ('OTHER', 'Other')], max_length=16)),
                ('relationship_details', models.TextField(blank=True, null=True)),
                ('date_of_birth', models.DateField(blank=True, null=True)),
                ('is_employed', models.BooleanField(blank=True, null=True)),
                ('is_student', models.BooleanField(blank=True, null=True)),
                ('vulnerability_flag', models.BooleanField(blank=True, null=True)),
                ('is_staff_link', models.BooleanField(default=False)),
                ('status', models.CharField(choices=BASE_STATUS, db_index=True, default='ACTIVE', max_length=16)),
                ('last_service_date', models.DateTimeField(blank=True, null=True)),
                ('preferred_language', models.CharField(blank=True, choices=LANGUAGE, max_length=16, null=True)),
                ('notes', models.TextField(blank=True, null=True)),
                ('guardian', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='guarded_beneficiaries', to='core.profile')),
                ('profile', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='beneficiary_records', to='core.profile')),
                ('staff', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='beneficiaries', to='core.staff')),
            ],
            options={
                'verbose_name_plural': 'beneficiaries',
            },
        ),
        migrations.CreateModel(
            name='Provider',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *soft_delete_fields(),
                ('name', models.CharField(max_length=255)),
                ('type', models.CharField(blank=True, choices=[('COUNSELOR', 'Counselor'), ('CLINIC', 'Clinic'), ('HOTLINE', 'Hotline'), ('COACH', 'Coach'), ('OTHER', 'Other')], max_length=16, null=True)),
                ('entity_type', models.CharField(choices=[('INDIVIDUAL', 'Individual'), ('COMPANY', 'Company')], default='INDIVIDUAL', max_length=16)),
                ('contact_email', models.EmailField(max_length=254)),
                ('contact_phone', models.CharField(blank=True, max_length=32, null=True)),
                ('location', models.CharField(blank=True, max_length=255, null=True)),
                ('qualifications', models.JSONField(blank=True, default=list)),
                ('specializations', models.JSONField(blank=True, default=list)),
                ('availability', models.JSONField(blank=True, null=True)),
                ('rating', models.FloatField(blank=True, null=True)),
                ('is_verified', models.BooleanField(db_index=True, default=False)),
                ('status', models.CharField(choices=WORK_STATUS, db_index=True, default='ACTIVE', max_length=16)),
            ],
            options={
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='ServiceCategory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *soft_delete_fields(),
                ('name', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True, null=True)),
            ],
            options={
                'verbose_name_plural': 'service categories',
                'constraints': [models.UniqueConstraint(condition=models.Q(('deleted_at__isnull', True)), fields=('name',), name='uniq_live_category_name')],
            },
        ),
        migrations.CreateModel(
            name='Service',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *soft_delete_fields(),
                *catalog_fields(),
                ('category', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='services', to='core.servicecategory')),
            ],
            options={
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='Intervention',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *soft_delete_fields(),
                *catalog_fields(),
                ('provider', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='interventions', to='core.provider')),
                ('service', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='interventions', to='core.service')),
            ],
            options={
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='Session',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *soft_delete_fields(),
                ('scheduled_at', models.DateTimeField(db_index=True)),
                ('completed_at', models.DateTimeField(blank=True, null=True)),
                ('status', models.CharField(choices=[('DRAFT', 'Draft'), ('UNCONFIRMED', 'Unconfirmed'), ('SCHEDULED', 'Scheduled'), ('RESCHEDULED', 'Rescheduled'), ('COMPLETED', 'Completed'), ('CANCELED', 'Canceled'), ('NO_SHOW', 'No Show')], db_index=True, default='SCHEDULED', max_length=16)),
                ('notes', models.TextField(blank=True, null=True)),
                ('feedback', models.TextField(blank=True, null=True)),
                ('duration', models.PositiveIntegerField(blank=True, help_text='Minutes', null=True)),
                ('location', models.CharField(blank=True, max_length=255, null=True)),
                ('cancellation_reason', models.TextField(blank=True, null=True)),
                ('reschedule_count', models.PositiveIntegerField(default=0)),
                ('is_group_session', models.BooleanField(default=False)),
                ('session_type', models.CharField(blank=True, max_length=32, null=True)),
                ('beneficiary', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='sessions', to='core.beneficiary')),
                ('client', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='sessions', to='core.client')),
                ('intervention', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='sessions', to='core.intervention')),
                ('provider', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='sessions', to='core.provider')),
                ('service', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='sessions', to='core.service')),
                ('staff', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='sessions', to='core.staff')),
            ],
            options={
                'indexes': [
                    models.Index(fields=['provider', 'scheduled_at'], name='session_provider_time_idx'),
                    models.Index(fields=['status', 'scheduled_at'], name='session_status_time_idx'),
                ],
                'constraints': [models.CheckConstraint(condition=models.Q(models.Q(('beneficiary__isnull', False), ('staff__isnull', True)), models.Q(('beneficiary__isnull', True), ('staff__isnull', False)), _connector='OR'), name='session_single_recipient')],
            },
        ),
        migrations.CreateModel(
            name='SessionFeedback',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('metadata', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('rating', models.PositiveSmallIntegerField()),
                ('comment', models.TextField(blank=True, null=True)),
                ('session', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='feedback_entries', to='core.session')),
            ],
            options={
                'constraints': [models.CheckConstraint(condition=models.Q(('rating__gte', 1), ('rating__lte', 5)), name='feedback_rating_range')],
            },
        ),
        migrations.CreateModel(
            name='AuditEvent',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('action', models.CharField(choices=[('CREATE', 'Create'), ('UPDATE', 'Update'), ('DELETE', 'Delete')], max_length=16)),
                ('entity_type', models.CharField(max_length=64)),
                ('entity_id', models.CharField(blank=True, max_length=64, null=True)),
                ('detail', models.JSONField(blank=True, default=dict)),
                ('ip', models.GenericIPAddressField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'indexes': [
                    models.Index(fields=['action', 'created_at'], name='audit_action_time_idx'),
                    models.Index(fields=['entity_type', 'entity_id', 'created_at'], name='audit_entity_time_idx'),
                ],
            },
        ),
    ]
