from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('rounds', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Participant',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('confirmed', 'Confirmed'), ('declined', 'Declined')], default='pending', max_length=10)),
                ('attested_at', models.DateTimeField(blank=True, null=True)),
                ('scores_entered_by', models.CharField(blank=True, choices=[('owner', 'Organizador (pre-carga)'), ('participant', 'Participante')], default='', max_length=12)),
                ('scores_confirmed', models.BooleanField(default=False)),
                ('total_score', models.PositiveIntegerField(default=0)),
                ('to_par', models.IntegerField(blank=True, null=True)),
                ('units_completed', models.PositiveSmallIntegerField(default=0)),
                ('last_score_update', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('round', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='participants', to='rounds.round')),
                ('identity', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='round_entries', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ('round', 'created_at', 'id'),
                'unique_together': {('round', 'identity')},
            },
        ),
    ]
